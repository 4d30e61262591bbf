# tests/test_store.py
import pytest

from core.commands import AssemblySession
from core.config import AppConfig, DEFAULTS
from core.errors import MalformedRecord
from core.model import Category, ComponentRecord
from core.store import MongoCatalogStore, SqliteCatalogStore, open_store, record_from_document


class FakeCollection:
    """Just enough of a pymongo Collection for MongoCatalogStore."""

    def __init__(self, docs=()):
        self.docs = [dict(d) for d in docs]
        self.next_id = 1

    def find(self, flt=None, projection=None):
        for d in self.docs:
            if projection and projection.get("_id") == 0:
                d = {k: v for k, v in d.items() if k != "_id"}
            yield d

    def insert_one(self, doc):
        doc = dict(doc)
        doc["_id"] = self.next_id
        self.next_id += 1
        self.docs.append(doc)

    def delete_one(self, flt):
        for i, d in enumerate(self.docs):
            if all(d.get(k) == v for k, v in flt.items()):
                del self.docs[i]
                return


def test_record_from_document():
    rec = record_from_document({"_id": "x", "category": "HDD/SSD", "name": "SSD 8TB", "price": 900})
    assert rec == ComponentRecord(Category.STORAGE, "SSD 8TB", 900)


@pytest.mark.parametrize("doc", [
    {"category": "GPU", "name": "RTX 5090"},
    {"category": "CPU", "name": "Ryzen 9", "price": 500},
    {"category": "GPU", "name": "RTX 5090", "price": "2000"},
    {"category": "GPU", "name": 5090, "price": 2000},
    None,
])
def test_record_from_document_rejects_malformed(doc):
    with pytest.raises(MalformedRecord):
        record_from_document(doc)


def test_mongo_store_roundtrip_through_collection():
    coll = FakeCollection([{"_id": 99, "category": "SMPS", "name": "850W Gold", "price": 140}])
    st = MongoCatalogStore(coll)
    assert st.list_all() == [ComponentRecord(Category.SMPS, "850W Gold", 140)]

    st.insert(ComponentRecord(Category.STORAGE, "SSD 8TB", 900))
    assert coll.docs[-1]["category"] == "HDD/SSD"
    assert coll.docs[-1]["price"] == 900

    st.delete_one(Category.SMPS, "850W Gold")
    st.delete_one(Category.SMPS, "not there")
    assert [d["name"] for d in coll.docs] == ["SSD 8TB"]
    st.close()


def test_sqlite_store_persists_across_connections(tmp_path):
    path = str(tmp_path / "data" / "components.db")
    st = SqliteCatalogStore(path)
    st.insert(ComponentRecord(Category.GPU, "Arc A770", 300))
    st.insert(ComponentRecord(Category.GPU, "Arc A770", 300))
    st.insert(ComponentRecord(Category.LICENSE, "Ubuntu Pro", 25))
    st.delete_one(Category.GPU, "Arc A770")
    st.delete_one(Category.RAM, "missing")
    st.close()

    st2 = SqliteCatalogStore(path)
    assert st2.list_all() == [
        ComponentRecord(Category.GPU, "Arc A770", 300),
        ComponentRecord(Category.LICENSE, "Ubuntu Pro", 25),
    ]
    st2.close()


def test_session_over_sqlite_restart(tmp_path):
    path = str(tmp_path / "components.db")
    s = AssemblySession.open(SqliteCatalogStore(path))
    s.add_component(Category.CHASSIS, "Small Form Factor", "110")
    s.remove_component(Category.CHASSIS, "Basic")
    s.close()

    s2 = AssemblySession.open(SqliteCatalogStore(path))
    assert s2.table.lookup(Category.CHASSIS, "Small Form Factor") == 110
    # defaults come back on every start
    assert s2.table.lookup(Category.CHASSIS, "Basic") == 40
    s2.close()


def test_open_store_picks_sqlite(tmp_path):
    cfg = AppConfig(dict(DEFAULTS, store="sqlite", sqlite_path=str(tmp_path / "c.db")))
    st = open_store(cfg)
    assert isinstance(st, SqliteCatalogStore)
    assert st.list_all() == []
    st.close()


def test_open_store_rejects_unknown_backend():
    with pytest.raises(ValueError):
        open_store(AppConfig(dict(DEFAULTS, store="redis")))
