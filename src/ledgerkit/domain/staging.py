"""Staging store for imported bank transactions."""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.amount import Amount, AmountLike
from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.entities import ImportedTransaction, IngestResult, SplitEntry, net_amount
from ledgerkit.domain.errors import NotFoundError, ValidationError, staged_transaction_not_found
from ledgerkit.domain.splits import validate_allocation, validate_sides
from ledgerkit.utils.date_parser import parse_date

logger = logging.getLogger(__name__)


class StagingService:
    """Service for staged (imported, not yet categorized) transactions."""

    def __init__(self, db: Database):
        """Initialize staging service.

        Args:
            db: Database instance
        """
        self.db = db
        self.directory = DirectoryService(db)

    def list_transactions(self, company_id: str) -> list[ImportedTransaction]:
        """List staged transactions of a company, newest first."""
        return self.db.list_imported_transactions(company_id)

    def get(self, imported_id: int) -> Optional[ImportedTransaction]:
        """Get a staged transaction by ID."""
        return self.db.get_imported_transaction(imported_id)

    def delete(self, imported_id: int) -> bool:
        """Delete a staged transaction.

        Returns:
            True if a row was removed, False if it was already gone
        """
        return self.db.delete_imported_transactions([imported_id]) == 1

    def delete_many(self, imported_ids: Iterable[int]) -> int:
        """Delete staged transactions; IDs that are already gone are ignored.

        Returns:
            Number of rows removed
        """
        return self.db.delete_imported_transactions(list(dict.fromkeys(imported_ids)))

    def insert_many(self, rows: Iterable[dict]) -> list[int]:
        """Insert staging rows as given. Returns IDs in input order."""
        return self.db.insert_imported_transactions(rows)

    def stage(
        self,
        company_id: str,
        date: date,
        description: str,
        source_account_id: int,
        spent: AmountLike = "0",
        received: AmountLike = "0",
        split_allocation: Optional[tuple[SplitEntry, ...]] = None,
    ) -> int:
        """Stage one transaction (manual entry).

        Args:
            company_id: Owning company
            date: Transaction date
            description: Bank description
            source_account_id: Chart-of-accounts entry of the bank account
            spent: Money out
            received: Money in
            split_allocation: Optional per-category breakdown of the net

        Returns:
            Staging row ID

        Raises:
            ValidationError: If amounts or the split allocation are malformed
            InvalidReferenceError: If an account is not in the company
        """
        row = self._validated_row(
            company_id=company_id,
            date=date,
            description=description,
            source_account_id=source_account_id,
            spent=Amount.parse(spent),
            received=Amount.parse(received),
            split_allocation=split_allocation,
        )
        (imported_id,) = self.db.insert_imported_transactions([row])
        logger.info("Staged transaction %s for company %s", imported_id, company_id)
        return imported_id

    def ingest(self, company_id: str, rows: Iterable[dict]) -> IngestResult:
        """Ingest a bank-feed batch, skipping rows that are already staged.

        Each row needs ``date``, ``description``, ``source_account_id`` and
        ``spent`` and/or ``received``. A row is a duplicate when source
        account, date, description and both amounts match a staged row or an
        earlier row of the same batch. The whole batch is validated before
        anything is written.
        """
        to_insert = []
        seen = set()
        skipped = 0
        for number, raw in enumerate(rows, start=1):
            for field in ("date", "source_account_id"):
                if raw.get(field) is None:
                    raise ValidationError(f"Feed row {number} is missing '{field}'")
            row = self._validated_row(
                company_id=company_id,
                date=raw.get("date"),
                description=raw.get("description") or "",
                source_account_id=raw.get("source_account_id"),
                spent=Amount.parse(raw.get("spent") or "0"),
                received=Amount.parse(raw.get("received") or "0"),
            )
            key = (row["source_account_id"], row["date"], row["description"], row["spent"], row["received"])
            if key in seen or self.db.imported_transaction_exists(company_id, *key):
                skipped += 1
                continue
            seen.add(key)
            to_insert.append(row)

        with self.db.atomic():
            inserted_ids = self.db.insert_imported_transactions(to_insert) if to_insert else []
        logger.info(
            "Ingested %d transaction(s) for company %s, skipped %d duplicate(s)",
            len(inserted_ids),
            company_id,
            skipped,
        )
        return IngestResult(inserted_ids=tuple(inserted_ids), skipped=skipped)

    def set_split(self, imported_id: int, allocation: Optional[tuple[SplitEntry, ...]]) -> None:
        """Attach a split allocation to a staged row, or clear it with None.

        Raises:
            NotFoundError: If the staged row does not exist
            ValidationError: If the allocation does not match the row's net
            InvalidReferenceError: If a split category is not in the company
        """
        staged = self.db.get_imported_transaction(imported_id)
        if staged is None:
            raise NotFoundError(staged_transaction_not_found(imported_id))

        if allocation:
            allocation = tuple(allocation)
            validate_allocation(allocation, staged.net)
            for entry in allocation:
                self.directory.require_account(entry.category_id, staged.company_id)
        else:
            allocation = None
            validate_sides(staged.spent, staged.received)

        self.db.update_imported_split(imported_id, allocation)

    def changed_since(self, company_id: str, watermark: Optional[datetime]) -> list[ImportedTransaction]:
        """Staged rows created or updated after the watermark (all rows when None)."""
        return self.db.list_imported_transactions(company_id, updated_since=watermark)

    def _validated_row(
        self,
        company_id: str,
        date: date,
        description: str,
        source_account_id: int,
        spent: Amount,
        received: Amount,
        split_allocation: Optional[tuple[SplitEntry, ...]] = None,
    ) -> dict:
        if isinstance(date, str):
            try:
                date = parse_date(date)
            except ValueError as e:
                raise ValidationError(str(e))
        elif isinstance(date, datetime):
            date = date.date()
        elif not hasattr(date, "isoformat"):
            raise ValidationError(f"Invalid transaction date {date!r}")
        validate_sides(spent, received, allow_both_zero=bool(split_allocation))
        self.directory.require_account(source_account_id, company_id)
        if split_allocation:
            split_allocation = tuple(split_allocation)
            validate_allocation(split_allocation, net_amount(spent, received))
            for entry in split_allocation:
                self.directory.require_account(entry.category_id, company_id)

        return {
            "company_id": company_id,
            "date": date,
            "description": description.strip(),
            "spent": spent,
            "received": received,
            "source_account_id": source_account_id,
            "split_allocation": split_allocation or None,
        }
