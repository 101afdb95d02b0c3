# models/base.py
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow():
    """Naive UTC timestamp, matching what SQLite DateTime columns hand back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
