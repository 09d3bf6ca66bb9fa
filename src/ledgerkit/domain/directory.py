"""Chart-of-accounts and payee directory service.

The ledger engine only reads from the directory. Creation exists so a company
can be seeded (``init-accounts``, tests); renaming, re-typing and deleting
accounts belong to the chart-of-accounts application, not to ledgerkit.
"""

from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import Account, AccountType, Payee
from ledgerkit.domain.errors import (
    ConflictError,
    InvalidReferenceError,
    ValidationError,
    account_not_found,
    payee_not_found,
)


class DirectoryService:
    """Service for chart-of-accounts and payee lookups."""

    def __init__(self, db: Database):
        """Initialize directory service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        company_id: str,
        name: str,
        account_type: Optional[AccountType] = None,
        parent_id: Optional[int] = None,
    ) -> int:
        """Create a chart-of-accounts entry.

        Args:
            company_id: Owning company
            name: Account name
            account_type: Accounting type; inherited from the parent when omitted
            parent_id: Optional parent account ID

        Returns:
            Account ID

        Raises:
            ValidationError: If the type is missing or differs from the parent's
            InvalidReferenceError: If the parent is not in the company
            ConflictError: If a sibling with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")

        if parent_id is not None:
            parent = self.require_account(parent_id, company_id)
            if account_type is None:
                account_type = parent.type
            elif AccountType(account_type) is not parent.type:
                raise ValidationError(
                    f"Account '{name}' must have type {parent.type.value} like its parent '{parent.name}'"
                )
        if account_type is None:
            raise ValidationError(f"Account '{name}' needs a type")
        account_type = AccountType(account_type)

        for existing in self.db.list_accounts(company_id):
            if existing.parent_id == parent_id and existing.name == name:
                raise ConflictError(f"Account '{name}' already exists in company '{company_id}'")

        return self.db.create_account(
            company_id=company_id, name=name, account_type=account_type, parent_id=parent_id
        )

    def get_account(self, account_id: int, company_id: str) -> Optional[Account]:
        """Get an account of a company, or None."""
        return self.db.get_account(account_id, company_id=company_id)

    def require_account(self, account_id: int, company_id: str) -> Account:
        """Get an account of a company.

        Raises:
            InvalidReferenceError: If the account is missing or belongs to another company
        """
        account = self.db.get_account(account_id, company_id=company_id)
        if account is None:
            raise InvalidReferenceError(account_not_found(account_id, company_id))
        return account

    def list_accounts(self, company_id: str) -> list[Account]:
        """List the chart of accounts of a company."""
        return self.db.list_accounts(company_id)

    def format_account_path(self, account_id: int, company_id: str) -> str:
        """Get the full path of an account (e.g., "Expenses > Office Supplies")."""
        account = self.get_account(account_id, company_id)
        if account is None:
            return ""

        path_parts = [account.name]
        current_parent_id = account.parent_id
        while current_parent_id is not None:
            parent = self.get_account(current_parent_id, company_id)
            if parent is None:
                break
            path_parts.append(parent.name)
            current_parent_id = parent.parent_id

        return " > ".join(reversed(path_parts))

    def create_payee(self, company_id: str, name: str) -> int:
        """Create a payee.

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the payee already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Payee name cannot be empty")
        for existing in self.db.list_payees(company_id):
            if existing.name == name:
                raise ConflictError(f"Payee '{name}' already exists in company '{company_id}'")
        return self.db.create_payee(company_id=company_id, name=name)

    def require_payee(self, payee_id: int, company_id: str) -> Payee:
        """Get a payee of a company.

        Raises:
            InvalidReferenceError: If the payee is missing or belongs to another company
        """
        payee = self.db.get_payee(payee_id, company_id=company_id)
        if payee is None:
            raise InvalidReferenceError(payee_not_found(payee_id, company_id))
        return payee

    def list_payees(self, company_id: str) -> list[Payee]:
        """List payees of a company."""
        return self.db.list_payees(company_id)
