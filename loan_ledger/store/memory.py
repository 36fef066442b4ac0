"""In-memory loan store with per-loan locking."""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from loan_ledger.exceptions import EntityNotFoundError, InvalidInputError, ReferentialIntegrityError
from loan_ledger.models import Customer, Loan, LoanStatus, Payment
from loan_ledger.store.base import LoanStore, LoanTransaction


@dataclass
class InMemoryLoanStore(LoanStore):
    """In-memory store for ledger entities with relationship tracking."""

    # Primary entities
    customers: dict[str, Customer] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)
    payments: list[Payment] = field(default_factory=list)

    # Relationship indexes
    _customer_loans: dict[str, list[str]] = field(default_factory=dict)
    _loan_payments: dict[str, list[int]] = field(default_factory=dict)

    # Per-loan locks, created lazily under the registry lock
    _locks: dict[str, threading.Lock] = field(default_factory=dict)
    _registry_lock: threading.Lock = field(default_factory=threading.Lock)

    def get_customer(self, customer_id: str) -> Customer | None:
        return self.customers.get(customer_id)

    def create_customer(self, customer: Customer) -> None:
        """Add a customer to the store."""
        with self._registry_lock:
            if customer.customer_id in self.customers:
                raise InvalidInputError(f"Customer {customer.customer_id} already exists", field="customer_id")
            self.customers[customer.customer_id] = customer
            self._customer_loans[customer.customer_id] = []

    def add_loan(self, loan: Loan) -> None:
        """Add a loan to the store."""
        if loan.customer_id not in self.customers:
            raise ReferentialIntegrityError(f"Customer {loan.customer_id} not found")

        with self._registry_lock:
            self.loans[loan.loan_id] = loan
            self._customer_loans[loan.customer_id].append(loan.loan_id)
            self._loan_payments[loan.loan_id] = []
            self._locks[loan.loan_id] = threading.Lock()

    def get_loan(self, loan_id: str) -> Loan | None:
        return self.loans.get(loan_id)

    def get_customer_loans(self, customer_id: str) -> list[Loan]:
        """Get all loans for a customer."""
        loan_ids = self._customer_loans.get(customer_id, [])
        return [self.loans[lid] for lid in loan_ids]

    def get_payments(self, loan_id: str) -> list[Payment]:
        """Get all payments for a loan, oldest first."""
        indices = list(self._loan_payments.get(loan_id, []))
        return sorted((self.payments[i] for i in indices), key=lambda p: p.created_at)

    @contextmanager
    def loan_transaction(self, loan_id: str) -> Iterator[LoanTransaction]:
        lock = self._locks.get(loan_id)
        if lock is None:
            raise EntityNotFoundError(f"Loan {loan_id} not found")

        with lock:
            tx = LoanTransaction(loan=self.loans[loan_id], payments=self.get_payments(loan_id))
            yield tx
            self._commit(tx)

    def _commit(self, tx: LoanTransaction) -> None:
        with self._registry_lock:
            for payment in tx.new_payments:
                idx = len(self.payments)
                self.payments.append(payment)
                self._loan_payments[payment.loan_id].append(idx)
        if tx.paid_off:
            tx.loan.status = LoanStatus.PAID_OFF

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "customers": len(self.customers),
            "loans": len(self.loans),
            "payments": len(self.payments),
        }
