# lorekeeper.py - lowercase lore utilities (ASCII, append-only)
# chronicles.txt holds readable dated blocks; Events.jsonl the same events
# one JSON object per line. Ledger writes never raise into the caller.
import datetime
import json
import os
import sys
import traceback

BASE_DIR = os.path.join(os.path.expanduser("~"), ".computer_assembly", "Lore")
DEBUG_ON = False

DIV = "=" * 79
MAX_JSONL_BYTES = 20 * 1024 * 1024

CHRONICLES_HEADER = f"""{DIV}
COMPUTER ASSEMBLY CHRONICLES - catalog and session events
{DIV}
note: append chronologically; never rewrite history
{DIV}
"""


def chronicles_path() -> str:
    return os.path.join(BASE_DIR, "chronicles.txt")


def events_path() -> str:
    return os.path.join(BASE_DIR, "Events.jsonl")


def configure(lore_dir: str | None = None, *, debug: bool | None = None) -> None:
    """Point the ledgers at `lore_dir` and toggle debug.log output."""
    global BASE_DIR, DEBUG_ON
    if lore_dir:
        BASE_DIR = lore_dir
    if debug is not None:
        DEBUG_ON = bool(debug)


def _ensure_dirs_and_headers():
    os.makedirs(BASE_DIR, exist_ok=True)
    path = chronicles_path()
    if not os.path.exists(path):
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(CHRONICLES_HEADER)


def _append_block(title: str, lines: list[str]) -> None:
    _ensure_dirs_and_headers()
    ts = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    block = [DIV, f"{title} - {ts}", DIV]
    block.extend(lines)
    block.append(DIV)
    with open(chronicles_path(), "a", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(block) + "\n")


def _append_jsonl(path: str, obj: dict) -> None:
    # rotate at ~20 MB to keep tailing snappy
    if os.path.exists(path) and os.path.getsize(path) >= MAX_JSONL_BYTES:
        root, ext = os.path.splitext(os.path.basename(path))
        ts = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        os.replace(path, os.path.join(os.path.dirname(path), f"{root}.{ts}{ext}"))

    obj = dict(obj)
    obj.setdefault("schema", "1.0")
    obj.setdefault("ts", datetime.datetime.now().isoformat(timespec="seconds"))
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False) + "\n")


def debug(exc: Exception, where: str = "") -> None:
    """
    Diagnostics to BASE_DIR/debug.log and stderr. Enable with ASSEMBLY_DEBUG=1.
    Swallows its own errors.
    """
    if not DEBUG_ON:
        return
    try:
        stamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        msg = f"[{stamp}] {where}: {exc}\n{tb}"
        print(msg, file=sys.stderr)
        os.makedirs(BASE_DIR, exist_ok=True)
        with open(os.path.join(BASE_DIR, "debug.log"), "a", encoding="utf-8") as f:
            f.write(msg + "\n")
    except Exception:
        pass


def log_event(event: str, details: list[str] | None = None) -> None:
    """
    log_event("component_added", ["category=GPU", "name=RTX 3060", "price=350"])
    """
    details = details or []
    try:
        _append_block("assembly log", [f"event: {event}"] + [f"- {d}" for d in details])
        _append_jsonl(events_path(), {"type": "event", "event": event, "data": details})
    except Exception as e:
        debug(e, f"log_event({event})")


def log_error(event: str, err: Exception) -> None:
    tb = "".join(traceback.format_exception(type(err), err, err.__traceback__))
    try:
        _append_block("assembly error", [f"error: {event}", "traceback:", tb.strip()])
        _append_jsonl(events_path(), {
            "type": "error",
            "event": event,
            "error": f"{type(err).__name__}: {err}",
        })
    except Exception as e:
        debug(e, f"log_error({event})")
    debug(err, event)
