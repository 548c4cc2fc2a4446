"""
Identifier and timestamp helpers shared by models and services
"""

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Random UUID4 as text (primary keys are stored as TEXT in SQLite)"""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime

    SQLite has no timezone-aware column type, so every stored timestamp is
    naive UTC and comparisons must use the same convention.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
