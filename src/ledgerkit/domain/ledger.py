"""Read side of the journal: listings, trial balance and drift checks."""

from collections import defaultdict
from datetime import date
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.amount import Amount
from ledgerkit.domain.entities import DriftReport, JournalLine, TrialBalance, TrialBalanceRow


class LedgerService:
    """Service for reading the persisted journal."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_journal(
        self,
        company_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        transaction_id: Optional[int] = None,
    ) -> list[JournalLine]:
        """List journal lines ordered by date, transaction and line ID."""
        return self.db.list_journal_lines(
            company_id,
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            transaction_id=transaction_id,
        )

    def trial_balance(
        self,
        company_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> TrialBalance:
        """Compute per-account debit and credit totals.

        Only accounts with at least one line in the period are listed. Rows
        are ordered like the chart of accounts (type, then name).

        Args:
            company_id: Company to report on
            start_date: Optional first date (inclusive)
            end_date: Optional last date (inclusive)

        Returns:
            Trial balance with per-account rows and grand totals
        """
        debits = defaultdict(Amount.zero)
        credits = defaultdict(Amount.zero)
        for line in self.list_journal(company_id, start_date=start_date, end_date=end_date):
            debits[line.account_id] += line.debit
            credits[line.account_id] += line.credit

        rows = []
        for account in self.db.list_accounts(company_id):
            if account.id in debits:
                rows.append(
                    TrialBalanceRow(
                        account=account,
                        debit_total=debits[account.id],
                        credit_total=credits[account.id],
                    )
                )
        return TrialBalance(company_id=company_id, start_date=start_date, end_date=end_date, rows=tuple(rows))

    def find_drift(self, company_id: str) -> DriftReport:
        """Compare confirmed transactions with the journal.

        Returns:
            Report listing transactions without lines, transactions whose
            lines do not balance, and line IDs whose transaction is gone
        """
        transaction_ids = {txn.id for txn in self.db.list_transactions(company_id)}
        lines_by_transaction = defaultdict(list)
        for line in self.db.list_journal_lines(company_id):
            lines_by_transaction[line.transaction_id].append(line)

        unbalanced = []
        orphan_lines = []
        for transaction_id, lines in lines_by_transaction.items():
            if transaction_id not in transaction_ids:
                orphan_lines.extend(line.id for line in lines)
            elif Amount.sum(line.debit for line in lines) != Amount.sum(line.credit for line in lines):
                unbalanced.append(transaction_id)

        return DriftReport(
            company_id=company_id,
            missing_lines=tuple(sorted(transaction_ids - set(lines_by_transaction))),
            unbalanced=tuple(sorted(unbalanced)),
            orphan_lines=tuple(sorted(orphan_lines)),
        )
