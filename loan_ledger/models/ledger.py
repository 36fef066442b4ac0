"""Derived ledger views."""

from dataclasses import dataclass, field
from decimal import Decimal

from loan_ledger.models.enums import LoanStatus
from loan_ledger.models.loan import Loan
from loan_ledger.models.payment import Payment


@dataclass(frozen=True)
class LedgerState:
    """Loan state derived from its terms and payment history."""

    amount_paid: Decimal
    balance: Decimal
    emis_left: int
    status: LoanStatus


@dataclass
class Ledger:
    """Full ledger of a loan: terms, derived state and transactions."""

    loan: Loan
    state: LedgerState
    transactions: list[Payment] = field(default_factory=list)


@dataclass
class LoanSummary:
    """One loan in a customer overview."""

    loan: Loan
    state: LedgerState


@dataclass
class CustomerOverview:
    """All loans of a customer with their derived summaries."""

    customer_id: str
    loans: list[LoanSummary] = field(default_factory=list)

    @property
    def total_loans(self) -> int:
        return len(self.loans)


@dataclass(frozen=True)
class PaymentReceipt:
    """Result of recording a payment."""

    payment_id: str
    loan_id: str
    balance: Decimal
    emis_left: int
    status: LoanStatus
