# core/store.py - persisted component collection (MongoDB or local SQLite)
# Thin pass-through: no retries, no uniqueness checks. Backend errors
# (pymongo.errors.PyMongoError, sqlite3.Error) propagate to the caller.

import os
import sqlite3
from typing import List, Protocol

from core.errors import MalformedRecord
from core.model import Category, ComponentRecord


class CatalogStore(Protocol):
    def list_all(self) -> List[ComponentRecord]: ...
    def insert(self, record: ComponentRecord) -> None: ...
    def delete_one(self, category: Category, name: str) -> None: ...
    def close(self) -> None: ...


def record_from_document(doc) -> ComponentRecord:
    """Rebuild a record from a stored {category, name, price} mapping."""
    try:
        label, name, price = doc["category"], doc["name"], doc["price"]
    except (KeyError, TypeError) as e:
        raise MalformedRecord(doc, f"missing field {e}") from None
    try:
        cat = Category(label)
    except ValueError as e:
        raise MalformedRecord(doc, str(e)) from None
    if not isinstance(name, str):
        raise MalformedRecord(doc, "name is not a string")
    if isinstance(price, bool) or not isinstance(price, int):
        raise MalformedRecord(doc, "price is not an integer")
    return ComponentRecord(cat, name, price)


# -------------------------- MongoDB --------------------------
class MongoCatalogStore:
    """
    One document per record in a single collection. The client is opened
    once and held until close().
    """

    def __init__(self, collection, client=None):
        self.collection = collection
        self._client = client

    @classmethod
    def connect(cls, uri: str, db_name: str, collection_name: str) -> "MongoCatalogStore":
        from pymongo import MongoClient
        client = MongoClient(uri)
        return cls(client[db_name][collection_name], client=client)

    def list_all(self) -> List[ComponentRecord]:
        return [record_from_document(doc) for doc in self.collection.find({}, {"_id": 0})]

    def insert(self, record: ComponentRecord) -> None:
        self.collection.insert_one(record.to_document())

    def delete_one(self, category: Category, name: str) -> None:
        self.collection.delete_one({"category": Category(category).value, "name": name})

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


# -------------------------- SQLite --------------------------
class SqliteCatalogStore:
    """Same record shape in one local table; handy without a database server."""

    def __init__(self, path: str):
        self.path = path
        if path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        self.con = sqlite3.connect(path)
        self._init_db()

    def _init_db(self):
        cur = self.con.cursor()
        if self.path != ":memory:":
            cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("""CREATE TABLE IF NOT EXISTS components(
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            category TEXT NOT NULL, name TEXT NOT NULL, price INTEGER NOT NULL
        )""")
        self.con.commit()

    def list_all(self) -> List[ComponentRecord]:
        cur = self.con.execute("SELECT category, name, price FROM components ORDER BY id")
        return [record_from_document({"category": c, "name": n, "price": p}) for c, n, p in cur]

    def insert(self, record: ComponentRecord) -> None:
        doc = record.to_document()
        self.con.execute(
            "INSERT INTO components(category, name, price) VALUES(?,?,?)",
            (doc["category"], doc["name"], doc["price"]),
        )
        self.con.commit()

    def delete_one(self, category: Category, name: str) -> None:
        self.con.execute(
            """DELETE FROM components WHERE id = (
                SELECT id FROM components WHERE category=? AND name=? ORDER BY id LIMIT 1
            )""",
            (Category(category).value, name),
        )
        self.con.commit()

    def close(self) -> None:
        if self.con is not None:
            self.con.close()
            self.con = None


def open_store(config) -> CatalogStore:
    if config.store == "sqlite":
        return SqliteCatalogStore(config.sqlite_path)
    if config.store == "mongo":
        return MongoCatalogStore.connect(config.mongo_uri, config.mongo_db, config.mongo_collection)
    raise ValueError(f"Unknown store backend '{config.store}'")
