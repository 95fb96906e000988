"""Shared field declarations and placeholder helpers for Google tools."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from ..schema import Field, string


def user_email() -> Field:
    return string("user_google_email", "The user's Google email address")


def now_ms() -> int:
    """Milliseconds since the epoch, used for generated ids and timestamps."""
    return int(time.time() * 1000)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
