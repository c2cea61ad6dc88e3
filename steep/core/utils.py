"""
Shared utility functions.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def generate_id() -> str:
    """Generate a unique 20-character document ID."""
    return uuid.uuid4().hex[:20]


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)
