"""Domain layer for ledgerbook application."""

__all__ = [
    "AccountService",
    "LedgerService",
]


# Services import the database interface, which imports domain entities;
# resolve them lazily to avoid circular imports.
def __getattr__(name):
    if name == "AccountService":
        from ledgerbook.domain.account import AccountService
        return AccountService
    if name == "LedgerService":
        from ledgerbook.domain.ledger import LedgerService
        return LedgerService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
