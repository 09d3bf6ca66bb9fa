"""Utility for resolving account names and paths to IDs."""

from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.errors import InvalidReferenceError


def resolve_account(directory: DirectoryService, company_id: str, account: str | int) -> int:
    """Resolve an account ID, name or path within a company.

    Args:
        directory: DirectoryService instance
        company_id: Company whose chart of accounts is searched
        account: Numeric ID, plain name ("Checking") or full path
            ("Expenses > Office Supplies")

    Returns:
        Account ID

    Raises:
        InvalidReferenceError: If no account matches, or a plain name matches
            more than one account
    """
    if isinstance(account, int) or str(account).strip().isdigit():
        return directory.require_account(int(account), company_id).id

    wanted = " > ".join(part.strip() for part in str(account).split(">"))
    accounts = directory.list_accounts(company_id)

    if ">" in wanted:
        for acc in accounts:
            if directory.format_account_path(acc.id, company_id) == wanted:
                return acc.id
        raise InvalidReferenceError(f"Account '{wanted}' not found in company '{company_id}'")

    matches = [acc for acc in accounts if acc.name == wanted]
    if not matches:
        raise InvalidReferenceError(f"Account '{wanted}' not found in company '{company_id}'")
    if len(matches) > 1:
        paths = ", ".join(directory.format_account_path(acc.id, company_id) for acc in matches)
        raise InvalidReferenceError(f"Account name '{wanted}' is ambiguous; use one of: {paths}")
    return matches[0].id
