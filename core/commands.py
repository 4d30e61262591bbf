# core/commands.py - session + command handlers (add / remove / total)
# Toolkit-independent: the Qt window calls these and renders the outcome.

from dataclasses import dataclass
from typing import Mapping

from core.catalog import PriceTable, build_price_table
from core.errors import InvalidPrice, MissingName, NothingSelected
from core.model import Category, ComponentRecord
from core.pricing import calculate_total, is_sentinel
from core.store import CatalogStore
from lore.lorekeeper import log_event


def parse_price(price_text: str | None) -> int:
    """'150' -> 150. Empty, non-integer and negative text raise InvalidPrice."""
    s = (price_text or "").strip()
    if not s:
        raise InvalidPrice()
    try:
        price = int(s)
    except ValueError:
        raise InvalidPrice() from None
    if price < 0:
        raise InvalidPrice()
    return price


@dataclass
class AssemblySession:
    """
    Owns the price table and the store connection for one app run.
    Every admin mutation updates the table first, then writes through to
    the store once; a failing store write is not rolled back.
    """
    table: PriceTable
    store: CatalogStore

    @classmethod
    def open(cls, store: CatalogStore) -> "AssemblySession":
        records = store.list_all()
        table = build_price_table(records)
        log_event("catalog_loaded", [f"stored={len(records)}", f"entries={len(table)}"])
        return cls(table, store)

    def add_component(self, category: Category, name_text: str | None,
                      price_text: str | None) -> ComponentRecord:
        cat = Category(category)
        name = (name_text or "").strip()
        if not name:
            raise MissingName()
        price = parse_price(price_text)

        rec = ComponentRecord(cat, name, price)
        self.table.put(cat, name, price)
        self.store.insert(rec)
        log_event("component_added", [f"category={cat.value}", f"name={name}", f"price={price}"])
        return rec

    def remove_component(self, category: Category, selection: str | None) -> str:
        cat = Category(category)
        if is_sentinel(selection):
            raise NothingSelected()
        name = str(selection)
        self.table.remove(cat, name)
        self.store.delete_one(cat, name)
        log_event("component_removed", [f"category={cat.value}", f"name={name}"])
        return name

    def calculate_total(self, selections: Mapping[Category, str | None]) -> int:
        return calculate_total(self.table, selections)

    def close(self) -> None:
        self.store.close()
