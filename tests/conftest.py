# tests/conftest.py
import os

import pytest

from core.model import Category
from lore import lorekeeper

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class RecordingStore:
    """In-memory stand-in for a CatalogStore that remembers every call."""

    def __init__(self, records=()):
        self.records = list(records)
        self.calls = []
        self.closed = False

    def list_all(self):
        self.calls.append(("list_all",))
        return list(self.records)

    def insert(self, record):
        self.calls.append(("insert", record))
        self.records.append(record)

    def delete_one(self, category, name):
        self.calls.append(("delete_one", Category(category), name))
        for i, rec in enumerate(self.records):
            if rec.category == Category(category) and rec.name == name:
                del self.records[i]
                break

    def close(self):
        self.closed = True


class BrokenStore(RecordingStore):
    def insert(self, record):
        raise ConnectionError("store unreachable")

    def delete_one(self, category, name):
        raise ConnectionError("store unreachable")


@pytest.fixture(autouse=True)
def lore_dir(tmp_path, monkeypatch):
    d = tmp_path / "Lore"
    monkeypatch.setattr(lorekeeper, "BASE_DIR", str(d))
    monkeypatch.setattr(lorekeeper, "DEBUG_ON", False)
    return d


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
