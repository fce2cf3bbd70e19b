"""
Test configuration and fixtures
"""

from datetime import date

import pytest
import pytest_asyncio

from church_manager.database import Database
from church_manager.models import Church, Member, MemberStatus
from church_manager.repositories import ChurchRepository, MemberRepository
from church_manager.services import ChurchService, MemberService


@pytest_asyncio.fixture
async def database(tmp_path):
    """Fresh file-backed database for each test"""
    db = Database(str(tmp_path / "church_app.db"))
    await db.initialize()
    try:
        yield db
    finally:
        await db.close()


@pytest.fixture
def church_repository(database):
    return ChurchRepository(database)


@pytest.fixture
def member_repository(database):
    return MemberRepository(database)


@pytest.fixture
def church_service(church_repository, member_repository):
    return ChurchService(church_repository, member_repository)


@pytest.fixture
def member_service(member_repository, church_repository):
    return MemberService(member_repository, church_repository)


@pytest.fixture
def sample_church():
    return Church(
        name="Grace Chapel",
        description="Neighbourhood congregation",
        address="12 Hope Street",
        phone="+1 555 0100",
        email="office@gracechapel.test",
        pastor_name="Pr. Samuel Costa",
        founding_date=date(1998, 5, 17),
    )


@pytest_asyncio.fixture
async def church(church_repository, sample_church):
    """A church already persisted in the database"""
    await church_repository.create_church(sample_church)
    return sample_church


@pytest_asyncio.fixture
async def members(member_repository, church):
    """Three members of the persisted church with mixed statuses"""
    created = []
    for full_name, status in [
        ("Zoe Walker", MemberStatus.ACTIVE),
        ("Mark Brown", MemberStatus.VISITOR),
        ("Anna Santos", MemberStatus.VISITOR),
    ]:
        member = Member(church_id=church.id, full_name=full_name, status=status)
        await member_repository.create_member(member)
        created.append(member)
    return created
