from enum import Enum
from typing import List, Optional

from sqlalchemy import delete, func, insert, select, update

from church_manager.database import Database
from church_manager.models import Member, MemberStatus


def _status_value(status) -> str:
    return status.value if isinstance(status, Enum) else status


def members_by_status_query(church_id: str, status):
    return (
        select(Member)
        .where(Member.church_id == church_id, Member.status == _status_value(status))
        .order_by(Member.full_name.asc())
    )


class MemberRepository:
    def __init__(self, database: Database):
        self.database = database

    async def get_member_by_id(self, member_id: str) -> Optional[Member]:
        async with self.database.session() as session:
            result = await session.execute(select(Member).where(Member.id == member_id))
            return result.scalars().first()

    async def get_members_by_church(self, church_id: str) -> List[Member]:
        async with self.database.session() as session:
            result = await session.execute(
                select(Member)
                .where(Member.church_id == church_id)
                .order_by(Member.full_name.asc())
            )
            return list(result.scalars().all())

    async def get_members_by_status(self, church_id: str, status) -> List[Member]:
        async with self.database.session() as session:
            result = await session.execute(members_by_status_query(church_id, status))
            return list(result.scalars().all())

    async def create_member(self, member: Member) -> int:
        member.update_timestamp()
        async with self.database.session() as session:
            result = await session.execute(
                insert(Member.__table__).values(**member.column_values())
            )
            await session.commit()
            return result.rowcount

    async def update_member(self, member: Member) -> int:
        member.update_timestamp()
        values = member.column_values()
        values.pop("id")
        async with self.database.session() as session:
            result = await session.execute(
                update(Member.__table__)
                .where(Member.__table__.c.id == member.id)
                .values(**values)
            )
            await session.commit()
            return result.rowcount

    async def delete_member(self, member_id: str) -> int:
        async with self.database.session() as session:
            result = await session.execute(
                delete(Member.__table__).where(Member.__table__.c.id == member_id)
            )
            await session.commit()
            return result.rowcount

    async def count_members_by_church(self, church_id: str) -> int:
        async with self.database.session() as session:
            result = await session.execute(
                select(func.count(Member.id)).where(Member.church_id == church_id)
            )
            return result.scalar_one()

    async def count_members_by_status(self, church_id: str, status) -> int:
        async with self.database.session() as session:
            result = await session.execute(
                select(func.count(Member.id)).where(
                    Member.church_id == church_id,
                    Member.status == _status_value(status),
                )
            )
            return result.scalar_one()

    async def count_active_members_by_church(self, church_id: str) -> int:
        return await self.count_members_by_status(church_id, MemberStatus.ACTIVE)

    async def get_unsynchronized_members(self) -> List[Member]:
        async with self.database.session() as session:
            result = await session.execute(
                select(Member).where(
                    Member.is_synchronized.is_(False),
                    Member.should_sync_to_cloud.is_(True),
                )
            )
            return list(result.scalars().all())

    async def mark_member_synchronized(self, member_id: str, change_hash: Optional[str] = None) -> int:
        """Flag a member as synchronized without touching updated_at."""
        values = {"is_synchronized": True}
        if change_hash is not None:
            values["last_change_hash"] = change_hash
        async with self.database.session() as session:
            result = await session.execute(
                update(Member.__table__)
                .where(Member.__table__.c.id == member_id)
                .values(**values)
            )
            await session.commit()
            return result.rowcount
