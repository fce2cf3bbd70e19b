import asyncio
import logging
from typing import List, Optional, Tuple

from church_manager.exceptions import NotFoundError, ValidationError
from church_manager.models import Church, Member, MemberStatus
from church_manager.repositories import ChurchRepository, MemberRepository
from church_manager.results import ChurchStatistics, OperationResult

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 200


class ChurchService:
    """Business rules for churches."""

    def __init__(self, church_repository: ChurchRepository, member_repository: MemberRepository):
        self.church_repository = church_repository
        self.member_repository = member_repository

    async def get_all(self) -> List[Church]:
        """Get all churches with their live member counts."""
        churches = await self.church_repository.get_all_churches()
        for church in churches:
            church.total_members = await self.member_repository.count_members_by_church(church.id)
        return churches

    async def get_details(self, church_id: str) -> Tuple[Optional[Church], List[Member]]:
        """Get a church together with its members."""
        church, members = await asyncio.gather(
            self.church_repository.get_church_by_id(church_id),
            self.member_repository.get_members_by_church(church_id),
        )
        members = members or []
        if church is not None:
            church.total_members = len(members)
        return church, members

    @staticmethod
    def _validate(church: Church):
        if not church.name or not church.name.strip():
            raise ValidationError("Church name is required", field="name")
        if len(church.name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Church name cannot exceed {MAX_NAME_LENGTH} characters", field="name"
            )

    async def create(self, church: Church) -> OperationResult[Church]:
        try:
            self._validate(church)
            await self.church_repository.create_church(church)
            logger.info(f"Church created successfully: {church.id} ({church.name})")
            return OperationResult.success(church)
        except ValidationError as e:
            logger.warning(f"Church creation rejected: {str(e)}")
            return OperationResult.failure(str(e), error=e)
        except Exception as e:
            logger.error(f"Error creating church: {str(e)}")
            return OperationResult.from_exception("Error creating church", e)

    async def update(self, church: Church) -> OperationResult[Church]:
        try:
            if not church.id or not church.id.strip():
                raise ValidationError("Invalid church ID", field="id")

            existing = await self.church_repository.get_church_by_id(church.id)
            if existing is None:
                raise NotFoundError("Church does not exist")

            self._validate(church)
            await self.church_repository.update_church(church)
            logger.info(f"Church updated successfully: {church.id}")
            return OperationResult.success(church)
        except (ValidationError, NotFoundError) as e:
            logger.warning(f"Church update rejected for {church.id}: {str(e)}")
            return OperationResult.failure(str(e), error=e)
        except Exception as e:
            logger.error(f"Error updating church {church.id}: {str(e)}")
            return OperationResult.from_exception("Error updating church", e)

    async def delete(self, church_id: str) -> OperationResult[bool]:
        """Delete a church and all its members."""
        try:
            church = await self.church_repository.get_church_by_id(church_id)
            if church is None:
                raise NotFoundError("Church does not exist")

            await self.church_repository.delete_church(church_id)
            logger.info(f"Church deleted successfully: {church_id}")
            return OperationResult.success(True)
        except NotFoundError as e:
            logger.warning(f"Church deletion rejected for {church_id}: {str(e)}")
            return OperationResult.failure(str(e), error=e)
        except Exception as e:
            logger.error(f"Error deleting church {church_id}: {str(e)}")
            return OperationResult.from_exception("Error deleting church", e)

    async def get_statistics(self, church_id: str) -> ChurchStatistics:
        total_members = await self.member_repository.count_members_by_church(church_id)
        active_members = await self.member_repository.count_active_members_by_church(church_id)
        visitor_members = await self.member_repository.count_members_by_status(
            church_id, MemberStatus.VISITOR
        )

        return ChurchStatistics(
            total_members=total_members,
            active_members=active_members,
            inactive_members=total_members - active_members,
            visitor_members=visitor_members,
        )
