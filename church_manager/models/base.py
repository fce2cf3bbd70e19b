import uuid
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import declarative_base

from .types import UTCDateTime

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


def as_utc(value):
    """Tag naive datetimes as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BaseEntity(Base):
    __abstract__ = True

    id = Column(String(36), primary_key=True)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
    # Whether the record has been pushed to the remote store
    is_synchronized = Column(Boolean, nullable=False, default=False)
    should_sync_to_cloud = Column(Boolean, nullable=False, default=True)
    # Reserved for change detection between syncs
    last_change_hash = Column(String(64), nullable=True)

    def __init__(self, **kwargs):
        now = utcnow()
        kwargs.setdefault("id", str(uuid.uuid4()))
        kwargs["created_at"] = as_utc(kwargs.get("created_at")) or now
        kwargs["updated_at"] = as_utc(kwargs.get("updated_at")) or kwargs["created_at"]
        kwargs.setdefault("is_synchronized", False)
        kwargs.setdefault("should_sync_to_cloud", True)
        super().__init__(**kwargs)

    def update_timestamp(self):
        """Refresh updated_at, always moving it forward."""
        now = utcnow()
        previous = as_utc(self.updated_at)
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        self.updated_at = now

    def column_values(self) -> dict:
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}

    def to_dict(self) -> dict:
        data = {}
        for key, value in self.column_values().items():
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            data[key] = value
        return data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, type(self)):
            return self.id == other.id
        return False

    def __hash__(self):
        return hash((type(self).__name__, self.id))
