# taskflow/schemas/common.py
"""
Shared response helpers.
Every endpoint answers with the same envelope:
{success, data?, message?, errors?}.
"""
from __future__ import annotations

import datetime as dt
from typing import Any


def ok(data: Any = None, message: str | None = None) -> dict:
    """Build a success envelope, omitting absent keys."""
    body: dict = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def iso_utc(value: dt.datetime | None) -> str | None:
    """ISO-8601 string for a stored timestamp; naive values are treated as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value.isoformat()
