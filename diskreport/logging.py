"""
diskreport.logging
AUTHOR: carter-vin

Run event log (JSON lines on stderr; stdout is reserved for the table)

Payload contract:
- every line: event_type, utc_now, tool_version
- host events carry `host`
- failure events carry `error_type` and `message`
- message is capped so one bad host cannot flood the log
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any

# Required fields per event type, on top of the common envelope
EVENT_FIELDS: dict[str, frozenset[str]] = {
    "run_start": frozenset(),
    "config_error": frozenset({"error_type", "message"}),
    "host_probe_failed": frozenset({"host", "error_type", "message"}),
    "host_query_failed": frozenset({"host", "error_type", "message"}),
    "host_collected": frozenset({"host", "disks"}),
    "report_written": frozenset({"path", "records"}),
    "report_write_failed": frozenset({"path", "error_type", "message"}),
    "run_shutdown": frozenset(),
}

VALID_EVENT_TYPES = frozenset(EVENT_FIELDS)

MESSAGE_LIMIT = 200


def _cap(value: str, limit: int = MESSAGE_LIMIT) -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + f"...[truncated {len(value) - limit} chars]"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def emit_event(event_type: str, *, tool_version: str, **fields: Any) -> None:
    """
    Write one event line to stderr

    Raises ValueError for unknown event types or missing required fields
    """
    required = EVENT_FIELDS.get(event_type)
    if required is None:
        raise ValueError(f"invalid event_type: {event_type}")

    missing = sorted(name for name in required if fields.get(name) is None)
    if missing:
        raise ValueError(f"{event_type} missing fields: {', '.join(missing)}")

    if isinstance(fields.get("message"), str):
        fields["message"] = _cap(fields["message"])

    payload: dict[str, Any] = {
        **fields,
        "event_type": event_type,
        "utc_now": utc_now_iso(),
        "tool_version": tool_version,
    }

    sys.stderr.write(
        json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False) + "\n"
    )
