# core/config.py - app settings loader (config/app.json + ASSEMBLY_* env overrides)

import json, os
from dataclasses import dataclass
from typing import Any, Dict

APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(APP_DIR, "config", "app.json")

STORE_BACKENDS = ("mongo", "sqlite")

DEFAULTS: Dict[str, Any] = {
    "store": "mongo",
    "mongo_uri": "mongodb://localhost:27017",
    "mongo_db": "computer_assembly_db",
    "mongo_collection": "components",
    "sqlite_path": "",
    "data_dir": os.path.join(os.path.expanduser("~"), ".computer_assembly"),
    "debug": False,
}

ENV_KEYS = {
    "store": "ASSEMBLY_STORE",
    "mongo_uri": "ASSEMBLY_MONGO_URI",
    "mongo_db": "ASSEMBLY_MONGO_DB",
    "mongo_collection": "ASSEMBLY_MONGO_COLLECTION",
    "sqlite_path": "ASSEMBLY_SQLITE_PATH",
    "data_dir": "ASSEMBLY_DATA_DIR",
    "debug": "ASSEMBLY_DEBUG",
}

# ---------- simple in-process cache ----------
_CONFIG_CACHE = None
_CONFIG_MTIME = None


def _truthy(v) -> bool:
    if isinstance(v, bool):
        return v
    return str(v).strip() not in ("0", "", "false", "False", "FALSE", "no", "off")


@dataclass
class AppConfig:
    raw: Dict[str, Any]

    @property
    def store(self) -> str:
        return str(self.raw["store"]).strip().lower()

    @property
    def mongo_uri(self) -> str:
        return self.raw["mongo_uri"]

    @property
    def mongo_db(self) -> str:
        return self.raw["mongo_db"]

    @property
    def mongo_collection(self) -> str:
        return self.raw["mongo_collection"]

    @property
    def data_dir(self) -> str:
        return os.path.expanduser(self.raw["data_dir"])

    @property
    def lore_dir(self) -> str:
        return os.path.join(self.data_dir, "Lore")

    @property
    def sqlite_path(self) -> str:
        return self.raw.get("sqlite_path") or os.path.join(self.data_dir, "components.db")

    @property
    def debug(self) -> bool:
        return _truthy(self.raw.get("debug", False))


def _read_config(path: str = CONFIG_PATH, env=None) -> AppConfig:
    env = os.environ if env is None else env
    data = dict(DEFAULTS)
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            on_disk = json.load(f)
        if not isinstance(on_disk, dict):
            raise ValueError(f"{path} must hold a JSON object (got {type(on_disk).__name__})")
        data.update({k: v for k, v in on_disk.items() if k in DEFAULTS})

    for key, var in ENV_KEYS.items():
        val = env.get(var)
        if val not in (None, ""):
            data[key] = val

    cfg = AppConfig(data)
    if cfg.store not in STORE_BACKENDS:
        raise ValueError(f"Unknown store backend '{cfg.store}' (expected one of {', '.join(STORE_BACKENDS)})")
    return cfg


def load_config(path: str = CONFIG_PATH) -> AppConfig:
    global _CONFIG_CACHE, _CONFIG_MTIME
    try:
        mtime = os.path.getmtime(path)
    except OSError:
        mtime = None

    if _CONFIG_CACHE is None or _CONFIG_MTIME != mtime:
        _CONFIG_CACHE = _read_config(path)
        _CONFIG_MTIME = mtime
    return _CONFIG_CACHE


def reload_config(path: str = CONFIG_PATH) -> AppConfig:
    """
    Force cache invalidation + re-read (picks up changed env vars too).
    """
    global _CONFIG_CACHE, _CONFIG_MTIME
    _CONFIG_CACHE = None
    _CONFIG_MTIME = None
    return load_config(path)
