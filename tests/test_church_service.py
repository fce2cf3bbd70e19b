"""
Tests for ChurchService business rules.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from church_manager.exceptions import ChurchManagerError, NotFoundError, StorageError, ValidationError
from church_manager.models import Church, Member, MemberStatus


class TestGetAll:
    @pytest.mark.asyncio
    async def test_enriches_member_counts(self, church_service, church_repository, church, members):
        empty = Church(name="Hope Church")
        await church_repository.create_church(empty)

        churches = {c.id: c for c in await church_service.get_all()}

        assert churches[church.id].total_members == 3
        assert churches[empty.id].total_members == 0

    @pytest.mark.asyncio
    async def test_empty_database(self, church_service):
        assert await church_service.get_all() == []


class TestGetDetails:
    @pytest.mark.asyncio
    async def test_returns_church_and_members(self, church_service, church, members):
        found, found_members = await church_service.get_details(church.id)

        assert found.id == church.id
        assert found.total_members == 3
        assert [m.full_name for m in found_members] == ["Anna Santos", "Mark Brown", "Zoe Walker"]

    @pytest.mark.asyncio
    async def test_missing_church_still_returns_members(self, church_service, member_repository):
        orphan = Member(church_id="missing", full_name="Orphan Member")
        await member_repository.create_member(orphan)

        found, found_members = await church_service.get_details("missing")

        assert found is None
        assert [m.id for m in found_members] == [orphan.id]

    @pytest.mark.asyncio
    async def test_missing_church_without_members(self, church_service):
        assert await church_service.get_details("missing") == (None, [])


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_returns_same_object(self, church_service, church_repository, sample_church):
        original_id = sample_church.id

        result = await church_service.create(sample_church)

        assert result.is_successful
        assert result.data is sample_church
        assert result.data.id == original_id
        assert result.message == "Operation successful"
        assert await church_repository.get_church_by_id(original_id) is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   ", None])
    async def test_blank_name_is_rejected(self, church_service, church_repository, name):
        result = await church_service.create(Church(name=name))

        assert not result.is_successful
        assert result.message == "Church name is required"
        assert isinstance(result.error, ValidationError)
        assert result.data is None
        assert await church_repository.get_all_churches() == []

    @pytest.mark.asyncio
    async def test_long_name_is_rejected(self, church_service):
        result = await church_service.create(Church(name="x" * 201))

        assert not result.is_successful
        assert result.message == "Church name cannot exceed 200 characters"

    @pytest.mark.asyncio
    async def test_name_of_exactly_200_characters_is_accepted(self, church_service):
        result = await church_service.create(Church(name="x" * 200))
        assert result.is_successful

    @pytest.mark.asyncio
    async def test_create_and_update_with_naive_created_at(self, church_service, church_repository):
        church = Church(name="Legacy", created_at=datetime(2020, 1, 1, 12, 0))

        created = await church_service.create(church)
        assert created.is_successful

        church.name = "Legacy Chapel"
        updated = await church_service.update(church)
        assert updated.is_successful

        stored = await church_repository.get_church_by_id(church.id)
        assert stored.name == "Legacy Chapel"
        assert stored.created_at == datetime(2020, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert stored.updated_at > stored.created_at

    @pytest.mark.asyncio
    async def test_storage_failure_becomes_failure_result(self, church_service, church_repository, sample_church):
        church_repository.create_church = AsyncMock(side_effect=StorageError("disk I/O error"))

        result = await church_service.create(sample_church)

        assert not result.is_successful
        assert result.message == "Error creating church: disk I/O error"
        assert isinstance(result.error, StorageError)

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_wrapped(self, church_service, church_repository, sample_church):
        church_repository.create_church = AsyncMock(side_effect=RuntimeError("boom"))

        result = await church_service.create(sample_church)

        assert not result.is_successful
        assert result.message == "Error creating church: boom"
        assert type(result.error) is ChurchManagerError


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_persists_changes(self, church_service, church_repository, church):
        previous = church.updated_at
        church.pastor_name = "Pr. Lydia Miller"

        result = await church_service.update(church)

        assert result.is_successful
        stored = await church_repository.get_church_by_id(church.id)
        assert stored.pastor_name == "Pr. Lydia Miller"
        assert stored.updated_at > previous

    @pytest.mark.asyncio
    async def test_blank_id_is_rejected(self, church_service):
        church = Church(name="Grace Chapel")
        church.id = " "

        result = await church_service.update(church)

        assert not result.is_successful
        assert result.message == "Invalid church ID"

    @pytest.mark.asyncio
    async def test_missing_church_is_rejected(self, church_service):
        result = await church_service.update(Church(name="Ghost"))

        assert not result.is_successful
        assert result.message == "Church does not exist"
        assert isinstance(result.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_blank_name_is_rejected_on_update(self, church_service, church_repository, church):
        church.name = ""

        result = await church_service.update(church)

        assert not result.is_successful
        stored = await church_repository.get_church_by_id(church.id)
        assert stored.name == "Grace Chapel"


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_cascades(self, church_service, member_service, church, members):
        result = await church_service.delete(church.id)

        assert result.is_successful
        assert result.data is True
        assert await member_service.get_members_by_church(church.id) == []

    @pytest.mark.asyncio
    async def test_delete_missing_church(self, church_service):
        result = await church_service.delete("missing")

        assert not result.is_successful
        assert result.message == "Church does not exist"
        assert isinstance(result.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_delete_storage_failure(self, church_service, church_repository, church):
        church_repository.delete_church = AsyncMock(side_effect=StorageError("database is locked"))

        result = await church_service.delete(church.id)

        assert not result.is_successful
        assert result.message == "Error deleting church: database is locked"


class TestStatistics:
    @pytest.mark.asyncio
    async def test_statistics_mixed_statuses(self, church_service, member_repository, church, members):
        await member_repository.create_member(
            Member(church_id=church.id, full_name="Paul Miller", status=MemberStatus.INACTIVE)
        )

        stats = await church_service.get_statistics(church.id)

        assert stats.total_members == 4
        assert stats.active_members == 1
        assert stats.inactive_members == 3
        assert stats.visitor_members == 2
        assert stats.active_members + stats.inactive_members == stats.total_members

    @pytest.mark.asyncio
    async def test_statistics_for_unknown_church(self, church_service):
        stats = await church_service.get_statistics("missing")
        assert stats.to_dict() == {
            "total_members": 0,
            "active_members": 0,
            "inactive_members": 0,
            "visitor_members": 0,
        }


@pytest.mark.asyncio
async def test_church_lifecycle_scenario(church_service, member_service):
    created = await church_service.create(Church(name="Grace Chapel"))
    assert created.is_successful
    church_id = created.data.id
    assert church_id

    added = await member_service.create(Member(church_id=church_id, full_name="Jane Doe"))
    assert added.is_successful

    listed = await member_service.get_members_by_church(church_id)
    assert [m.full_name for m in listed] == ["Jane Doe"]

    stats = await church_service.get_statistics(church_id)
    assert (stats.total_members, stats.active_members, stats.inactive_members) == (1, 1, 0)

    deleted = await church_service.delete(church_id)
    assert deleted.is_successful
    assert await member_service.get_members_by_church(church_id) == []
