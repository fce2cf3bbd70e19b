import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update

from church_manager.database import Database
from church_manager.models import Church, Member
from church_manager.repositories.member_repository import members_by_status_query

logger = logging.getLogger(__name__)


class ChurchRepository:
    def __init__(self, database: Database):
        self.database = database

    async def get_church_by_id(self, church_id: str) -> Optional[Church]:
        async with self.database.session() as session:
            result = await session.execute(select(Church).where(Church.id == church_id))
            return result.scalars().first()

    async def get_all_churches(self) -> List[Church]:
        async with self.database.session() as session:
            result = await session.execute(select(Church))
            return list(result.scalars().all())

    async def create_church(self, church: Church) -> int:
        church.update_timestamp()
        async with self.database.session() as session:
            result = await session.execute(
                insert(Church.__table__).values(**church.column_values())
            )
            await session.commit()
            return result.rowcount

    async def update_church(self, church: Church) -> int:
        church.update_timestamp()
        values = church.column_values()
        values.pop("id")
        async with self.database.session() as session:
            result = await session.execute(
                update(Church.__table__)
                .where(Church.__table__.c.id == church.id)
                .values(**values)
            )
            await session.commit()
            return result.rowcount

    async def delete_church(self, church_id: str) -> int:
        """Delete a church and all of its members in a single transaction."""
        async with self.database.session() as session:
            async with session.begin():
                members_deleted = await session.execute(
                    delete(Member.__table__).where(Member.__table__.c.church_id == church_id)
                )
                result = await session.execute(
                    delete(Church.__table__).where(Church.__table__.c.id == church_id)
                )
            logger.info(
                f"Deleted church {church_id} with {members_deleted.rowcount} members"
            )
            return result.rowcount

    async def delete_members_by_church(self, church_id: str) -> int:
        async with self.database.session() as session:
            result = await session.execute(
                delete(Member.__table__).where(Member.__table__.c.church_id == church_id)
            )
            await session.commit()
            return result.rowcount

    async def get_members_by_status(self, church_id: str, status) -> List[Member]:
        async with self.database.session() as session:
            result = await session.execute(members_by_status_query(church_id, status))
            return list(result.scalars().all())

    async def get_unsynchronized_churches(self) -> List[Church]:
        async with self.database.session() as session:
            result = await session.execute(
                select(Church).where(
                    Church.is_synchronized.is_(False),
                    Church.should_sync_to_cloud.is_(True),
                )
            )
            return list(result.scalars().all())

    async def mark_church_synchronized(self, church_id: str, change_hash: Optional[str] = None) -> int:
        """Flag a church as synchronized without touching updated_at."""
        values = {"is_synchronized": True}
        if change_hash is not None:
            values["last_change_hash"] = change_hash
        async with self.database.session() as session:
            result = await session.execute(
                update(Church.__table__)
                .where(Church.__table__.c.id == church_id)
                .values(**values)
            )
            await session.commit()
            return result.rowcount

    async def clear_all_records(self):
        async with self.database.session() as session:
            async with session.begin():
                await session.execute(delete(Member.__table__))
                await session.execute(delete(Church.__table__))
