# core/model.py
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Category(str, Enum):
    MOTHERBOARD = "Motherboard"
    RAM = "RAM"
    STORAGE = "HDD/SSD"
    GPU = "GPU"
    SMPS = "SMPS"
    CHASSIS = "Chassis"
    LICENSE = "License"

    def __str__(self) -> str:
        return self.value


# Display order of the selection widgets and admin forms
CATEGORIES = tuple(Category)

# Placeholder shown first in every selection widget
SENTINEL = "Select"


class ComponentKey(NamedTuple):
    category: Category
    name: str


@dataclass(frozen=True)
class ComponentRecord:
    category: Category
    name: str
    price: int

    @property
    def key(self) -> ComponentKey:
        return ComponentKey(self.category, self.name)

    def to_document(self) -> dict:
        return {"category": self.category.value, "name": self.name, "price": int(self.price)}
