from sqlalchemy import Column, Date, Index, String, Text

from .base import BaseEntity


class Church(BaseEntity):
    __tablename__ = "churches"
    __table_args__ = (Index("idx_church_synchronized", "is_synchronized"),)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    # Local path, URL or base64 payload
    photo_url = Column(Text, nullable=True)
    pastor_name = Column(String(200), nullable=True)
    founding_date = Column(Date, nullable=True)

    # Computed on read, never persisted
    total_members = 0

    def to_dict(self):
        data = super().to_dict()
        data["total_members"] = self.total_members
        return data

    def __str__(self):
        return self.name or ""

    def __repr__(self):
        return (
            f"Church("
            f"id={self.id}, "
            f"name='{self.name}', "
            f"pastor_name='{self.pastor_name}', "
            f"total_members={self.total_members}, "
            f"is_synchronized={self.is_synchronized}"
            f")"
        )
