"""Full journal rebuild for one company."""

import logging

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import ResyncResult
from ledgerkit.domain.errors import NoTransactionsError
from ledgerkit.domain.journal import build_for_transaction

logger = logging.getLogger(__name__)


class ResyncEngine:
    """Deletes and re-derives every journal line of a company."""

    def __init__(self, db: Database):
        """Initialize resync engine.

        Args:
            db: Database instance
        """
        self.db = db

    def resync_all(self, company_id: str) -> ResyncResult:
        """Rebuild the company's journal from its confirmed transactions.

        The delete runs before the scan inside one atomic unit holding the
        company lock, so a concurrent move either lands before the scan (and
        is rebuilt) or waits until the rebuild commits.

        Args:
            company_id: Company to rebuild

        Returns:
            Counts of transactions rebuilt and lines written

        Raises:
            NoTransactionsError: If the company has no confirmed transactions;
                the previous journal is left untouched
            ValidationError: If a stored transaction can no longer be expanded
            BalanceError: If a derived journal does not balance
            PersistenceError: If a write failed
        """
        with self.db.atomic():
            self.db.lock_company(company_id, exclusive=True)
            deleted = self.db.delete_company_journal(company_id)

            transactions = self.db.list_transactions(company_id)
            if not transactions:
                raise NoTransactionsError(f"Company '{company_id}' has no confirmed transactions to rebuild")

            # Oldest first so line ids follow posting order
            lines = []
            for transaction in sorted(transactions, key=lambda txn: (txn.date, txn.id)):
                lines.extend(build_for_transaction(transaction))
            inserted = self.db.insert_journal_lines(lines)

        logger.info(
            "Resynced company %s: %d transaction(s), %d line(s) replacing %d",
            company_id,
            len(transactions),
            inserted,
            deleted,
        )
        return ResyncResult(company_id=company_id, transactions=len(transactions), lines=inserted)
