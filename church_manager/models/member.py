from enum import Enum

from sqlalchemy import Column, Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import validates

from .base import BaseEntity
from .enums import MemberRole, MemberStatus
from .types import UTCDateTime


class Member(BaseEntity):
    __tablename__ = "members"
    __table_args__ = (
        Index("idx_member_church", "church_id"),
        Index("idx_member_synchronized", "is_synchronized"),
    )

    church_id = Column(String(36), ForeignKey("churches.id"), nullable=False)
    full_name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(255), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    role = Column(String(20), nullable=False, default=MemberRole.MEMBER.value)
    status = Column(String(20), nullable=False, default=MemberStatus.ACTIVE.value)
    join_date = Column(UTCDateTime, nullable=False)
    photo_url = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    def __init__(self, **kwargs):
        kwargs.setdefault("role", MemberRole.MEMBER)
        kwargs.setdefault("status", MemberStatus.ACTIVE)
        super().__init__(**kwargs)
        if self.join_date is None:
            self.join_date = self.created_at

    @validates("role", "status")
    def _store_enum_value(self, key, value):
        # Enum members are stored by value; unknown strings are rejected by the services
        if isinstance(value, Enum):
            return value.value
        return value

    def __str__(self):
        return self.full_name or ""

    def __repr__(self):
        return (
            f"Member("
            f"id={self.id}, "
            f"church_id={self.church_id}, "
            f"full_name='{self.full_name}', "
            f"role={self.role}, "
            f"status={self.status}"
            f")"
        )
