"""Repository abstraction the ledger service is built on."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass, field

from loan_ledger.exceptions import ReferentialIntegrityError
from loan_ledger.models import Customer, Loan, LoanStatus, Payment


@dataclass
class LoanTransaction:
    """Unit of work over a single loan.

    ``loan`` and ``payments`` are read while the loan is locked. Writes are
    staged here and applied by the store only when the transaction exits
    without an exception.
    """

    loan: Loan
    payments: list[Payment]
    new_payments: list[Payment] = field(default_factory=list)
    paid_off: bool = False

    def append_payment(self, payment: Payment) -> None:
        """Stage a payment for this loan."""
        if payment.loan_id != self.loan.loan_id:
            raise ReferentialIntegrityError(
                f"Payment {payment.payment_id} belongs to loan {payment.loan_id}, not {self.loan.loan_id}"
            )
        self.new_payments.append(payment)

    def mark_paid_off(self) -> None:
        """Stage the ACTIVE -> PAID_OFF transition."""
        self.paid_off = self.loan.status != LoanStatus.PAID_OFF

    @property
    def all_payments(self) -> list[Payment]:
        """Committed plus staged payments."""
        return self.payments + self.new_payments


class LoanStore(ABC):
    """Persistence for customers, loans and their append-only payments."""

    @abstractmethod
    def get_customer(self, customer_id: str) -> Customer | None:
        """Return a customer, or None if unknown."""

    @abstractmethod
    def create_customer(self, customer: Customer) -> None:
        """Persist a new customer."""

    @abstractmethod
    def add_loan(self, loan: Loan) -> None:
        """Persist a new loan for an existing customer."""

    @abstractmethod
    def get_loan(self, loan_id: str) -> Loan | None:
        """Return a loan, or None if unknown."""

    @abstractmethod
    def get_customer_loans(self, customer_id: str) -> list[Loan]:
        """Return a customer's loans in creation order."""

    @abstractmethod
    def get_payments(self, loan_id: str) -> list[Payment]:
        """Return a loan's payments ordered by creation time ascending."""

    @abstractmethod
    def loan_transaction(self, loan_id: str) -> AbstractContextManager[LoanTransaction]:
        """Lock a loan and yield a unit of work for it.

        Transactions on the same loan are serialized; transactions on
        different loans do not block each other.

        Raises
        ------
        EntityNotFoundError
            If the loan does not exist.
        """

    @abstractmethod
    def summary(self) -> dict[str, int]:
        """Return entity counts."""
