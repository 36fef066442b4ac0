"""Loan stores: the repository layer behind the ledger service."""

from loan_ledger.config import STORE_BACKENDS, LedgerConfig
from loan_ledger.exceptions import ConfigurationError
from loan_ledger.store.base import LoanStore, LoanTransaction
from loan_ledger.store.memory import InMemoryLoanStore

__all__ = ["InMemoryLoanStore", "LoanStore", "LoanTransaction", "create_store"]


def create_store(config: LedgerConfig) -> LoanStore:
    """Build the store selected by ``config.store_backend``."""
    if config.store_backend == "memory":
        return InMemoryLoanStore()
    if config.store_backend == "postgres":
        from loan_ledger.store.postgres import PostgresLoanStore

        store = PostgresLoanStore(config.postgres.connection_string)
        store.initialize()
        return store
    raise ConfigurationError(
        f"Unknown store backend {config.store_backend!r}; expected one of {', '.join(STORE_BACKENDS)}"
    )
