# core/pricing.py - build total + default component price list

from typing import Dict, Mapping, Tuple

from core.model import CATEGORIES, SENTINEL, Category

# ---------------------------------------------------------------------
# Default price list
# ---------------------------------------------------------------------
# Seeded into every session at startup and never written to the store.
# Insertion order is the order the selection widgets list them in.

DEFAULT_COMPONENTS: Dict[Tuple[Category, str], int] = {
    # ----------------------------- BOARDS -----------------------------
    (Category.MOTHERBOARD, "A"):                  150,
    (Category.MOTHERBOARD, "B"):                  200,
    (Category.MOTHERBOARD, "Enthusiast X570"):    350,
    (Category.MOTHERBOARD, "High-End Z690"):      500,

    # ------------------------------ RAM -------------------------------
    (Category.RAM, "8GB"):                        50,
    (Category.RAM, "16GB"):                       90,
    (Category.RAM, "32GB"):                       180,
    (Category.RAM, "64GB High-Performance"):      350,

    # ---------------------------- STORAGE -----------------------------
    (Category.STORAGE, "HDD 500GB"):              60,
    (Category.STORAGE, "HDD 1TB"):                100,
    (Category.STORAGE, "HDD 2TB"):                150,
    (Category.STORAGE, "HDD 4TB"):                250,
    (Category.STORAGE, "SSD 256GB"):              50,
    (Category.STORAGE, "SSD 512GB"):              80,
    (Category.STORAGE, "SSD 1TB"):                150,
    (Category.STORAGE, "SSD 1TB NVMe"):           200,
    (Category.STORAGE, "SSD 2TB NVMe"):           400,
    (Category.STORAGE, "SSD 4TB NVMe"):           800,

    # ------------------------------ GPU -------------------------------
    (Category.GPU, "GTX 1050"):                   180,
    (Category.GPU, "RTX 3060"):                   350,
    (Category.GPU, "RTX 4090"):                   1600,
    (Category.GPU, "RX 7900 XTX"):                1200,

    # ------------------------- POWER / CASE ---------------------------
    (Category.SMPS, "500W"):                      60,
    (Category.SMPS, "750W"):                      100,
    (Category.SMPS, "1000W Platinum"):            200,
    (Category.SMPS, "1200W Titanium"):            300,
    (Category.CHASSIS, "Basic"):                  40,
    (Category.CHASSIS, "Mid-Tower"):              80,
    (Category.CHASSIS, "Full-Tower"):             150,

    # ---------------------------- LICENSE -----------------------------
    (Category.LICENSE, "Windows 10"):             100,
    (Category.LICENSE, "Windows 11"):             120,
    (Category.LICENSE, "Office 2021"):            150,
}


def is_sentinel(selection) -> bool:
    return selection is None or str(selection) == SENTINEL


def calculate_total(table, selections: Mapping[Category, str | None]) -> int:
    """
    Sum the price of the current selection in each of the seven categories.
    Categories missing from `selections`, the sentinel, and names the table
    does not know all count as 0.
    """
    total = 0
    for cat in CATEGORIES:
        total += table.lookup(cat, selections.get(cat))
    return total


def format_total(total: int) -> str:
    return f"Total: ${int(total)}"


__all__ = [
    "DEFAULT_COMPONENTS",
    "is_sentinel",
    "calculate_total",
    "format_total",
]
