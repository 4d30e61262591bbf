# core/catalog.py - in-memory price table + helpers

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Set

from core.model import Category, ComponentKey, ComponentRecord
from core.pricing import DEFAULT_COMPONENTS, is_sentinel


@dataclass
class PriceTable:
    """
    Prices keyed by (category, name). Lookups never fail: the sentinel and
    unknown keys price at 0.
    """
    prices: Dict[ComponentKey, int] = field(default_factory=dict)
    # keys whose current price came from the store or an admin add
    _stored: Set[ComponentKey] = field(default_factory=set, repr=False)

    def seed_defaults(self) -> None:
        for (cat, name), price in DEFAULT_COMPONENTS.items():
            key = ComponentKey(cat, name)
            self.prices[key] = int(price)
            self._stored.discard(key)

    def load_from_store(self, records: Iterable[ComponentRecord]) -> int:
        """Apply stored records on top of whatever is present. Returns the count applied."""
        n = 0
        for rec in records:
            self.put(rec.category, rec.name, rec.price)
            n += 1
        return n

    def put(self, category: Category, name: str, price: int) -> None:
        key = ComponentKey(Category(category), name)
        self.prices[key] = int(price)
        self._stored.add(key)

    def remove(self, category: Category, name: str) -> None:
        key = ComponentKey(Category(category), name)
        self.prices.pop(key, None)
        self._stored.discard(key)

    def lookup(self, category: Category, name: str | None) -> int:
        if is_sentinel(name):
            return 0
        return self.prices.get(ComponentKey(Category(category), str(name)), 0)

    def names_for(self, category: Category) -> List[str]:
        cat = Category(category)
        return [k.name for k in self.prices if k.category == cat]

    def source(self, category: Category, name: str) -> str:
        key = ComponentKey(Category(category), name)
        if key not in self.prices:
            return ""
        return "stored" if key in self._stored else "default"

    def records(self) -> List[ComponentRecord]:
        return [ComponentRecord(k.category, k.name, p) for k, p in self.prices.items()]

    def __contains__(self, key) -> bool:
        try:
            cat, name = key
            return ComponentKey(Category(cat), name) in self.prices
        except (TypeError, ValueError):
            return False

    def __len__(self) -> int:
        return len(self.prices)

    def __iter__(self) -> Iterator[ComponentKey]:
        return iter(self.prices)


def build_price_table(records: Iterable[ComponentRecord] = ()) -> PriceTable:
    """
    Defaults, then stored records, then the defaults again: a default price
    always wins over a stored record with the same key, while the picker
    order stays defaults first, store-only names after.
    """
    table = PriceTable()
    table.seed_defaults()
    table.load_from_store(records)
    table.seed_defaults()
    return table
