from church_manager.repositories.church_repository import ChurchRepository
from church_manager.repositories.member_repository import MemberRepository
