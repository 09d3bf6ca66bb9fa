"""Confirmation mover: the only path from staging to the ledger.

Every operation validates first and then performs all of its writes inside
one ``Database.atomic()`` unit, so a failure leaves staging, confirmed
transactions and the journal exactly as they were.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date as date_type
from typing import Iterable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.entities import (
    Categorization,
    ConfirmedTransaction,
    ImportedTransaction,
    JournalLineDraft,
    MoveRequest,
    SimpleCategorization,
    SplitCategorization,
)
from ledgerkit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    missing_ids_message,
    staged_transaction_not_found,
    transaction_not_found,
)
from ledgerkit.domain.journal import build
from ledgerkit.domain.splits import expand_categorization

logger = logging.getLogger(__name__)

_UNCHANGED = object()


@dataclass(frozen=True)
class _MovePlan:
    """Validated move of one staging row, ready to persist."""

    staged: ImportedTransaction
    row: dict
    lines: tuple[JournalLineDraft, ...]


class ConfirmationMover:
    """Moves staged transactions into the ledger and back."""

    def __init__(self, db: Database):
        """Initialize confirmation mover.

        Args:
            db: Database instance
        """
        self.db = db
        self.directory = DirectoryService(db)

    def move_one(
        self,
        imported_id: int,
        selected_category_id: Optional[int],
        corresponding_category_id: int,
        payee_id: Optional[int] = None,
    ) -> ConfirmedTransaction:
        """Confirm one staged transaction and write its journal lines.

        Args:
            imported_id: Staging row ID
            selected_category_id: Category to post against; may be None only
                when the staged row carries a split allocation
            corresponding_category_id: Bank/source account side
            payee_id: Optional payee

        Returns:
            The confirmed transaction

        Raises:
            NotFoundError: If the staging row is absent or already moved
            InvalidReferenceError: If a category or payee is not in the company
            ValidationError: If amounts or the split allocation are malformed, or
                a category is given for a split row
            PersistenceError: If a write failed (everything rolled back)
        """
        staged = self.db.get_imported_transaction(imported_id)
        if staged is None:
            raise NotFoundError(staged_transaction_not_found(imported_id))

        plan = self._plan(
            staged,
            MoveRequest(
                imported_id=imported_id,
                selected_category_id=selected_category_id,
                corresponding_category_id=corresponding_category_id,
                payee_id=payee_id,
            ),
        )

        with self.db.atomic():
            self.db.lock_company(staged.company_id)
            transaction_id = self._persist(plan)
            confirmed = self.db.get_transaction(transaction_id)

        logger.info("Moved staged transaction %s to transaction %s", imported_id, transaction_id)
        return confirmed

    def move_many(self, requests: Iterable[MoveRequest]) -> list[ConfirmedTransaction]:
        """Confirm several staged transactions as one all-or-nothing batch.

        Raises:
            ConflictError: If an ID is requested twice or any staging row is
                missing; ``missing_ids`` lists the absent rows
            InvalidReferenceError: If any category or payee is invalid
            ValidationError: If any row's amounts or split are malformed
            PersistenceError: If a write failed (the whole batch rolled back)
        """
        requests = list(requests)
        if not requests:
            return []

        ids = [request.imported_id for request in requests]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConflictError(missing_ids_message("Staged transactions requested more than once", duplicates))

        staged_by_id = {row.id: row for row in self.db.get_imported_transactions(ids)}
        missing = [i for i in ids if i not in staged_by_id]
        if missing:
            raise ConflictError(
                missing_ids_message("Staged transactions not found or already moved", missing),
                missing_ids=missing,
            )

        plans = [self._plan(staged_by_id[request.imported_id], request) for request in requests]

        with self.db.atomic():
            for company_id in sorted({plan.staged.company_id for plan in plans}):
                self.db.lock_company(company_id)
            transaction_ids = [self._persist(plan, batch=True) for plan in plans]
            confirmed = [self.db.get_transaction(transaction_id) for transaction_id in transaction_ids]

        logger.info("Moved %d staged transaction(s) in one batch", len(confirmed))
        return confirmed

    def edit(
        self,
        transaction_id: int,
        categorization: Categorization,
        payee_id=_UNCHANGED,
        date: Optional[date_type] = None,
        description: Optional[str] = None,
    ) -> ConfirmedTransaction:
        """Recategorize a confirmed transaction and re-derive its journal lines.

        Stored spent/received never change. A categorization without a
        corresponding account keeps the current one.

        Args:
            transaction_id: Confirmed transaction ID
            categorization: New simple or split categorization
            payee_id: New payee, None to clear; omitted keeps the current payee
            date: Optional new date
            description: Optional new description

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If the transaction does not exist
            InvalidReferenceError: If a category or payee is not in the company
            ValidationError: If the categorization does not fit the amounts
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        if categorization.corresponding_category_id is None:
            categorization = replace(
                categorization, corresponding_category_id=transaction.corresponding_category_id
            )
        if payee_id is _UNCHANGED:
            payee_id = transaction.payee_id
        new_date = date or transaction.date
        new_description = transaction.description if description is None else description.strip()

        self._check_references(transaction.company_id, categorization, payee_id)
        lines = build(
            transaction_id=transaction.id,
            date=new_date,
            description=new_description,
            intents=expand_categorization(
                categorization, transaction.spent, transaction.received, new_description
            ),
            company_id=transaction.company_id,
        )

        values = {
            "date": new_date,
            "description": new_description,
            "payee_id": payee_id,
            "corresponding_category_id": categorization.corresponding_category_id,
        }
        if isinstance(categorization, SplitCategorization):
            values["selected_category_id"] = None
            values["split_allocation"] = tuple(categorization.allocation)
        else:
            values["selected_category_id"] = categorization.selected_category_id
            values["split_allocation"] = None

        with self.db.atomic():
            self.db.lock_company(transaction.company_id)
            self.db.delete_journal_lines([transaction.id], transaction.company_id)
            self.db.update_transaction(transaction.id, values)
            self.db.insert_journal_lines(lines)
            updated = self.db.get_transaction(transaction.id)

        logger.info("Recategorized transaction %s (%d journal lines)", transaction.id, len(lines))
        return updated

    def undo(self, transaction_id: int) -> ImportedTransaction:
        """Send a confirmed transaction back to staging.

        Returns:
            The recreated staging row

        Raises:
            NotFoundError: If the transaction does not exist
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        with self.db.atomic():
            self.db.lock_company(transaction.company_id)
            (imported_id,) = self._unconfirm([transaction])
            staged = self.db.get_imported_transaction(imported_id)

        logger.info("Returned transaction %s to staging as %s", transaction_id, imported_id)
        return staged

    def undo_many(self, transaction_ids: Iterable[int]) -> list[ImportedTransaction]:
        """Send several confirmed transactions back to staging, all or nothing.

        Raises:
            NotFoundError: If any transaction does not exist
        """
        ids = list(dict.fromkeys(transaction_ids))
        if not ids:
            return []
        by_id = {txn.id: txn for txn in self.db.get_transactions(ids)}
        missing = [i for i in ids if i not in by_id]
        if missing:
            raise NotFoundError(missing_ids_message("Transactions not found", missing))

        transactions = [by_id[i] for i in ids]
        with self.db.atomic():
            for company_id in sorted({txn.company_id for txn in transactions}):
                self.db.lock_company(company_id)
            imported_ids = self._unconfirm(transactions)
            staged = self.db.get_imported_transactions(imported_ids)

        logger.info("Returned %d transaction(s) to staging", len(imported_ids))
        order = {imported_id: position for position, imported_id in enumerate(imported_ids)}
        return sorted(staged, key=lambda row: order[row.id])

    def delete(self, transaction_id: int) -> None:
        """Delete a confirmed transaction together with its journal lines.

        Raises:
            NotFoundError: If the transaction does not exist
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        with self.db.atomic():
            self.db.lock_company(transaction.company_id)
            self.db.delete_journal_lines([transaction.id], transaction.company_id)
            if self.db.delete_transactions([transaction.id], transaction.company_id) != 1:
                raise NotFoundError(transaction_not_found(transaction_id))

        logger.info("Deleted transaction %s", transaction_id)

    def _plan(self, staged: ImportedTransaction, request: MoveRequest) -> _MovePlan:
        if staged.split_allocation:
            if request.selected_category_id is not None:
                raise ValidationError(
                    f"Staged transaction {staged.id} is split; move it without a category or clear the split first"
                )
            categorization = SplitCategorization(
                allocation=staged.split_allocation,
                corresponding_category_id=request.corresponding_category_id,
            )
        elif request.selected_category_id is None:
            raise ValidationError(
                f"Staged transaction {staged.id} needs a category or a split allocation"
            )
        else:
            categorization = SimpleCategorization(
                selected_category_id=request.selected_category_id,
                corresponding_category_id=request.corresponding_category_id,
            )

        self._check_references(staged.company_id, categorization, request.payee_id)

        # Transaction id is not known yet; it is filled in when persisting
        lines = build(
            transaction_id=None,
            date=staged.date,
            description=staged.description,
            intents=expand_categorization(categorization, staged.spent, staged.received, staged.description),
            company_id=staged.company_id,
        )
        row = {
            "company_id": staged.company_id,
            "date": staged.date,
            "description": staged.description,
            "spent": staged.spent,
            "received": staged.received,
            "selected_category_id": request.selected_category_id,
            "corresponding_category_id": request.corresponding_category_id,
            "payee_id": request.payee_id,
            "source_account_id": staged.source_account_id,
            "split_allocation": staged.split_allocation,
        }
        return _MovePlan(staged=staged, row=row, lines=lines)

    def _persist(self, plan: _MovePlan, batch: bool = False) -> int:
        removed = self.db.delete_imported_transactions([plan.staged.id], plan.staged.company_id)
        if removed != 1:
            if batch:
                raise ConflictError(
                    missing_ids_message("Staged transactions not found or already moved", [plan.staged.id]),
                    missing_ids=[plan.staged.id],
                )
            raise NotFoundError(staged_transaction_not_found(plan.staged.id))

        transaction_id = self.db.insert_transaction(plan.row)
        self.db.insert_journal_lines(replace(line, transaction_id=transaction_id) for line in plan.lines)
        return transaction_id

    def _check_references(self, company_id: str, categorization: Categorization, payee_id: Optional[int]) -> None:
        self.directory.require_account(categorization.corresponding_category_id, company_id)
        if isinstance(categorization, SplitCategorization):
            for entry in categorization.allocation:
                self.directory.require_account(entry.category_id, company_id)
        else:
            self.directory.require_account(categorization.selected_category_id, company_id)
        if payee_id is not None:
            self.directory.require_payee(payee_id, company_id)

    def _unconfirm(self, transactions: list[ConfirmedTransaction]) -> list[int]:
        rows = []
        for transaction in transactions:
            self.db.delete_journal_lines([transaction.id], transaction.company_id)
            if self.db.delete_transactions([transaction.id], transaction.company_id) != 1:
                raise NotFoundError(transaction_not_found(transaction.id))
            rows.append(
                {
                    "company_id": transaction.company_id,
                    "date": transaction.date,
                    "description": transaction.description,
                    "spent": transaction.spent,
                    "received": transaction.received,
                    "source_account_id": transaction.source_account_id,
                    "split_allocation": transaction.split_allocation,
                }
            )
        return self.db.insert_imported_transactions(rows)
