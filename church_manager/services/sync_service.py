"""
Synchronization bookkeeping.

This package does not talk to any remote store. A ``SyncTransport`` supplied
by the caller does the actual push; ``SyncService`` picks the records that
need pushing and records the outcome in the sync flags.
"""

import hashlib
import json
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Protocol

from church_manager.models import BaseEntity
from church_manager.repositories import ChurchRepository, MemberRepository

logger = logging.getLogger(__name__)

# Bookkeeping columns that do not count as a change to the record
UNHASHED_COLUMNS = {"updated_at", "is_synchronized", "should_sync_to_cloud", "last_change_hash"}


class SyncTransport(Protocol):
    async def push(self, records: List[BaseEntity]) -> Dict[str, bool]:
        """Push records to the remote store and return the outcome per record id."""
        ...


@dataclass
class SyncReport:
    pushed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.failed


def compute_change_hash(entity: BaseEntity) -> str:
    values = {
        key: value
        for key, value in entity.column_values().items()
        if key not in UNHASHED_COLUMNS
    }
    payload = json.dumps(values, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class SyncService:
    def __init__(
        self,
        church_repository: ChurchRepository,
        member_repository: MemberRepository,
        transport: SyncTransport,
    ):
        self.church_repository = church_repository
        self.member_repository = member_repository
        self.transport = transport

    async def synchronize(self) -> SyncReport:
        """Push unsynchronized churches, then members, and flag what was accepted."""
        report = SyncReport()

        churches = await self.church_repository.get_unsynchronized_churches()
        await self._push(churches, self.church_repository.mark_church_synchronized, report)

        members = await self.member_repository.get_unsynchronized_members()
        await self._push(members, self.member_repository.mark_member_synchronized, report)

        logger.info(
            f"Synchronization finished: {len(report.pushed)} pushed, {len(report.failed)} failed"
        )
        return report

    async def _push(
        self,
        records: List[BaseEntity],
        mark_synchronized: Callable[..., Awaitable[int]],
        report: SyncReport,
    ):
        if not records:
            return

        try:
            outcomes = await self.transport.push(records)
        except Exception as e:
            logger.error(f"Sync transport failed for {len(records)} records: {str(e)}")
            report.failed.extend(record.id for record in records)
            return

        for record in records:
            if not outcomes.get(record.id):
                report.failed.append(record.id)
                continue

            change_hash = compute_change_hash(record)
            await mark_synchronized(record.id, change_hash=change_hash)
            record.is_synchronized = True
            record.last_change_hash = change_hash
            report.pushed.append(record.id)
