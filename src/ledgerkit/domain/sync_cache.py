"""Client-side cache of transaction listings with a last-sync watermark."""

import logging
from datetime import datetime
from typing import Callable, Generic, Iterable, Optional, TypeVar

from ledgerkit.domain.entities import ConfirmedTransaction, ImportedTransaction

logger = logging.getLogger(__name__)

Record = TypeVar("Record", ImportedTransaction, ConfirmedTransaction)


class SyncCache(Generic[Record]):
    """Records keyed by ID, refreshed incrementally from a watermark.

    Merging is deterministic: unknown IDs are added, known IDs are replaced
    only by a strictly newer ``updated_at`` (ties keep the cached record).
    """

    def __init__(self, records: Iterable[Record] = ()):
        self._records: dict[int, Record] = {}
        self.watermark: Optional[datetime] = None
        self.merge(records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._records

    def get(self, record_id: int) -> Optional[Record]:
        return self._records.get(record_id)

    def merge(self, records: Iterable[Record]) -> int:
        """Merge fetched records into the cache.

        Returns:
            Number of records added or replaced
        """
        changed = 0
        for record in records:
            cached = self._records.get(record.id)
            if cached is None or _is_newer(record, cached):
                self._records[record.id] = record
                changed += 1
            if record.updated_at is not None and (self.watermark is None or record.updated_at > self.watermark):
                self.watermark = record.updated_at
        return changed

    def remove(self, record_ids: Iterable[int]) -> int:
        """Drop records (moved, undone or deleted). Returns how many were cached."""
        removed = 0
        for record_id in record_ids:
            if self._records.pop(record_id, None) is not None:
                removed += 1
        return removed

    def refresh(self, fetch: Callable[[Optional[datetime]], Iterable[Record]]) -> int:
        """Fetch records changed since the watermark and merge them.

        Args:
            fetch: Called with the current watermark (None on first sync),
                e.g. ``functools.partial(staging.changed_since, company_id)``

        Returns:
            Number of records added or replaced
        """
        since = self.watermark
        changed = self.merge(fetch(since))
        logger.debug("Cache refresh since %s changed %d record(s)", since, changed)
        return changed

    def values(self) -> list[Record]:
        """Cached records, newest date first, then highest ID first."""
        return sorted(self._records.values(), key=lambda record: (record.date, record.id), reverse=True)


def _is_newer(incoming, cached) -> bool:
    if incoming.updated_at is None:
        return False
    if cached.updated_at is None:
        return True
    return incoming.updated_at > cached.updated_at
