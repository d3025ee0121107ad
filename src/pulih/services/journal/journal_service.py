"""
Journal Service

Owner-scoped operations on journal entries and their analytics.

Every operation takes the caller's OwnerContext explicitly. Entries
are only ever returned, changed or deleted for their owner.
"""

from datetime import tzinfo
from typing import Iterable, Optional, Sequence
from uuid import UUID

from pulih.config.logging_config import get_logger
from pulih.domain.exceptions import (
    EntryAccessDeniedError,
    EntryNotFoundError,
    NotAuthenticatedError,
)
from pulih.domain.models.analytics import MonthlyAnalytics
from pulih.domain.models.episode import EpisodeDraft, EpisodeRecord
from pulih.domain.models.user import OwnerContext
from pulih.infrastructure.metrics import track_analytics, track_journal_mutation
from pulih.infrastructure.storage.base import EpisodeStore
from pulih.services.journal import analytics

logger = get_logger(__name__)


def _require_owner(ctx: Optional[OwnerContext]) -> OwnerContext:
    if ctx is None:
        raise NotAuthenticatedError()
    return ctx


class JournalService:
    """
    Journal entry CRUD plus monthly analytics.

    Usage:
        service = JournalService(store, tz=ZoneInfo("Asia/Jakarta"))
        entry = await service.create_entry(ctx, draft)
        report = await service.monthly_analytics(ctx, "2024-05")
    """

    def __init__(
        self,
        store: EpisodeStore,
        *,
        tz: Optional[tzinfo] = None,
        locale: str = "id",
        default_top_n: int = analytics.DEFAULT_TOP_N,
    ) -> None:
        """
        Initialize journal service.

        Args:
            store: Entry storage
            tz: Zone for local hours and chart labels
            locale: Chart label language
            default_top_n: Tag ranking size when the caller gives none
        """
        self._store = store
        self._tz = tz
        self._locale = locale
        self._default_top_n = default_top_n

    async def _get_owned(self, ctx: OwnerContext, entry_id: UUID, action: str) -> EpisodeRecord:
        record = await self._store.get(entry_id)
        if record is None:
            raise EntryNotFoundError(entry_id)
        if record.owner_id != ctx.user_id:
            logger.warning(
                "Journal entry access denied",
                entry_id=str(entry_id),
                user_id=str(ctx.user_id),
                action=action,
            )
            raise EntryAccessDeniedError(action)
        return record

    async def list_entries(self, ctx: Optional[OwnerContext]) -> Sequence[EpisodeRecord]:
        """All of the caller's entries, newest first."""
        ctx = _require_owner(ctx)
        entries = analytics.newest_first(await self._store.list_for_owner(ctx.user_id), self._tz)
        logger.debug("Journal entries listed", user_id=str(ctx.user_id), count=len(entries))
        return entries

    async def get_entry(self, ctx: Optional[OwnerContext], entry_id: UUID) -> EpisodeRecord:
        """
        Get one of the caller's entries.

        Raises:
            EntryNotFoundError: No entry with this ID
            EntryAccessDeniedError: Entry belongs to another user
        """
        ctx = _require_owner(ctx)
        return await self._get_owned(ctx, entry_id, "view")

    async def create_entry(self, ctx: Optional[OwnerContext], draft: EpisodeDraft) -> EpisodeRecord:
        """Create an entry owned by the caller."""
        ctx = _require_owner(ctx)
        record = await self._store.add(EpisodeRecord.create(ctx.user_id, draft))
        track_journal_mutation("create")
        logger.info("Journal entry created", entry_id=str(record.id), user_id=str(ctx.user_id))
        return record

    async def update_entry(
        self,
        ctx: Optional[OwnerContext],
        entry_id: UUID,
        draft: EpisodeDraft,
    ) -> EpisodeRecord:
        """
        Replace the editable fields of one of the caller's entries.

        ``id`` and ``owner_id`` are never changed.
        """
        ctx = _require_owner(ctx)
        existing = await self._get_owned(ctx, entry_id, "update")
        record = await self._store.replace(existing.with_draft(draft))
        track_journal_mutation("update")
        logger.info("Journal entry updated", entry_id=str(entry_id), user_id=str(ctx.user_id))
        return record

    async def delete_entry(self, ctx: Optional[OwnerContext], entry_id: UUID) -> None:
        """Permanently delete one of the caller's entries."""
        ctx = _require_owner(ctx)
        await self._get_owned(ctx, entry_id, "delete")
        await self._store.delete(entry_id)
        track_journal_mutation("delete")
        logger.info("Journal entry deleted", entry_id=str(entry_id), user_id=str(ctx.user_id))

    async def import_entries(
        self,
        ctx: Optional[OwnerContext],
        drafts: Iterable[EpisodeDraft],
    ) -> int:
        """
        Import entries kept by an older, device-local journal.

        Skipped when the caller already has entries, so repeating an
        import never duplicates data.

        Returns:
            Number of entries imported
        """
        ctx = _require_owner(ctx)
        if await self._store.count_for_owner(ctx.user_id) > 0:
            logger.info("Journal import skipped, entries already exist", user_id=str(ctx.user_id))
            return 0

        imported = 0
        for draft in drafts:
            await self._store.add(EpisodeRecord.create(ctx.user_id, draft))
            imported += 1

        if imported:
            track_journal_mutation("import", imported)
        logger.info("Journal import complete", user_id=str(ctx.user_id), count=imported)
        return imported

    async def monthly_analytics(
        self,
        ctx: Optional[OwnerContext],
        month: str,
        top_n: Optional[int] = None,
    ) -> MonthlyAnalytics:
        """
        Analytics for one month of the caller's journal.

        Args:
            ctx: Caller
            month: Year-month selector (YYYY-MM)
            top_n: Tag ranking size (default from configuration)
        """
        ctx = _require_owner(ctx)
        records = await self._store.list_for_owner(ctx.user_id)
        report = analytics.analyze_month(
            records,
            month,
            top_n=top_n if top_n is not None else self._default_top_n,
            tz=self._tz,
            locale=self._locale,
        )
        track_analytics(report.summary.total_count)
        return report

    async def available_months(self, ctx: Optional[OwnerContext]) -> list[str]:
        """Months with entries, newest first."""
        ctx = _require_owner(ctx)
        return analytics.available_months(await self._store.list_for_owner(ctx.user_id))
