"""Custom SQLAlchemy column types used by the models."""
from datetime import datetime, timezone

from sqlalchemy.types import DateTime, TypeDecorator


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime stored as a naive UTC value.

    SQLite has no timezone support and hands back naive datetimes, so values
    are normalized to UTC on the way in and re-tagged as UTC on the way out.
    Naive datetimes passed in are assumed to already be UTC.
    """

    cache_ok = True
    impl = DateTime

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        return value.replace(tzinfo=timezone.utc)
