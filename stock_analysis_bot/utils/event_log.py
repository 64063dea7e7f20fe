import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import pytz

# Path to the log file; can be overridden via EVENT_LOG_PATH env var or set_log_path.
_LOG_PATH = Path(os.environ.get("EVENT_LOG_PATH", "stock_bot_events.jsonl"))
_TZ = pytz.timezone(os.environ.get("TIMEZONE", "Asia/Kolkata"))


def set_log_path(path: str | Path) -> None:
    """Override the log file path (useful for tests)."""
    global _LOG_PATH
    _LOG_PATH = Path(path)


def get_log_path() -> Path:
    """Return the current log file path."""
    return _LOG_PATH


def set_timezone(name: str) -> None:
    global _TZ
    _TZ = pytz.timezone(name)


def log_event(event: str, distinct_id: str, data: Dict[str, Any] | None = None) -> None:
    """Append an analytics event to the log as a JSON line.

    Parameters
    ----------
    event:
        Type of the event (e.g., "language_set", "stock_analysis_requested").
    distinct_id:
        The user the event is attributed to.
    data:
        Arbitrary JSON-serializable properties.
    """
    record = {
        "ts": datetime.now(_TZ).isoformat(),
        "event": event,
        "distinct_id": distinct_id,
        **(data or {}),
    }
    _LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    with _LOG_PATH.open("a", encoding="utf-8") as f:
        json.dump(record, f, ensure_ascii=False, default=str)
        f.write("\n")
