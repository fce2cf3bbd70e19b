from church_manager.models.base import Base, BaseEntity
from church_manager.models.church import Church
from church_manager.models.member import Member
from church_manager.models.enums import MemberRole, MemberStatus
