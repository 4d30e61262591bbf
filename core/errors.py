# core/errors.py - exception types raised by the catalog core


class AssemblyError(Exception):
    """Base for everything the assembly core raises on purpose."""


class CatalogInputError(AssemblyError):
    """
    User-input problem. Carries the notice shown to the operator;
    raised before any state is touched.
    """
    message = "Invalid input."

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidPrice(CatalogInputError):
    message = "Please enter a valid price."


class MissingName(CatalogInputError):
    message = "Please enter a component name."


class NothingSelected(CatalogInputError):
    message = "Please select a component to remove."


class MalformedRecord(AssemblyError):
    """A stored document is missing a field or names an unknown category."""

    def __init__(self, doc, reason: str):
        self.doc = doc
        self.reason = reason
        super().__init__(f"Malformed component record {doc!r}: {reason}")
