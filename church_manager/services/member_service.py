import logging
from enum import Enum
from typing import List

from church_manager.exceptions import NotFoundError, ValidationError
from church_manager.models import Member, MemberRole, MemberStatus
from church_manager.repositories import ChurchRepository, MemberRepository
from church_manager.results import OperationResult

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 200


def _normalize_choice(enum_cls, value, label: str) -> str:
    """Return the stored string value for an enum member or its value."""
    raw = value.value if isinstance(value, Enum) else value
    try:
        return enum_cls(raw).value
    except ValueError:
        raise ValidationError(f"Invalid member {label}: {raw}", field=label)


class MemberService:
    """Business rules for members."""

    def __init__(self, member_repository: MemberRepository, church_repository: ChurchRepository):
        self.member_repository = member_repository
        self.church_repository = church_repository

    async def get_members_by_church(self, church_id: str) -> List[Member]:
        return await self.member_repository.get_members_by_church(church_id)

    async def get_members_by_status(self, church_id: str, status) -> List[Member]:
        return await self.church_repository.get_members_by_status(church_id, status)

    @staticmethod
    def _validate(member: Member):
        if not member.full_name or not member.full_name.strip():
            raise ValidationError("Full name is required", field="full_name")
        if len(member.full_name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Full name cannot exceed {MAX_NAME_LENGTH} characters", field="full_name"
            )
        member.role = _normalize_choice(MemberRole, member.role, "role")
        member.status = _normalize_choice(MemberStatus, member.status, "status")

    async def create(self, member: Member) -> OperationResult[Member]:
        try:
            if not member.church_id or not member.church_id.strip():
                raise ValidationError("ChurchId is required", field="church_id")

            self._validate(member)

            church = await self.church_repository.get_church_by_id(member.church_id)
            if church is None:
                raise NotFoundError("Specified church does not exist")

            await self.member_repository.create_member(member)
            logger.info(f"Member created successfully: {member.id} in church {member.church_id}")
            return OperationResult.success(member)
        except (ValidationError, NotFoundError) as e:
            logger.warning(f"Member creation rejected: {str(e)}")
            return OperationResult.failure(str(e), error=e)
        except Exception as e:
            logger.error(f"Error creating member: {str(e)}")
            return OperationResult.from_exception("Error creating member", e)

    async def update(self, member: Member) -> OperationResult[Member]:
        try:
            if not member.id or not member.id.strip():
                raise ValidationError("Invalid member ID", field="id")

            existing = await self.member_repository.get_member_by_id(member.id)
            if existing is None:
                raise NotFoundError("Member does not exist")

            self._validate(member)
            await self.member_repository.update_member(member)
            logger.info(f"Member updated successfully: {member.id}")
            return OperationResult.success(member)
        except (ValidationError, NotFoundError) as e:
            logger.warning(f"Member update rejected for {member.id}: {str(e)}")
            return OperationResult.failure(str(e), error=e)
        except Exception as e:
            logger.error(f"Error updating member {member.id}: {str(e)}")
            return OperationResult.from_exception("Error updating member", e)

    async def delete(self, member_id: str) -> OperationResult[bool]:
        try:
            member = await self.member_repository.get_member_by_id(member_id)
            if member is None:
                raise NotFoundError("Member does not exist")

            await self.member_repository.delete_member(member_id)
            logger.info(f"Member deleted successfully: {member_id}")
            return OperationResult.success(True)
        except NotFoundError as e:
            logger.warning(f"Member deletion rejected for {member_id}: {str(e)}")
            return OperationResult.failure(str(e), error=e)
        except Exception as e:
            logger.error(f"Error deleting member {member_id}: {str(e)}")
            return OperationResult.from_exception("Error deleting member", e)

    async def search_by_name(self, church_id: str, search_term: str) -> List[Member]:
        """Case-insensitive substring search over a church's member names."""
        members = await self.member_repository.get_members_by_church(church_id)
        if not search_term or not search_term.strip():
            return members

        term = search_term.casefold()
        return [m for m in members if term in (m.full_name or "").casefold()]
