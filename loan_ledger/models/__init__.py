"""Domain models for the loan ledger."""

from loan_ledger.models.customer import Customer
from loan_ledger.models.enums import LoanStatus, PaymentKind
from loan_ledger.models.ledger import (
    CustomerOverview,
    Ledger,
    LedgerState,
    LoanSummary,
    PaymentReceipt,
)
from loan_ledger.models.loan import Loan, LoanTerms
from loan_ledger.models.payment import Payment

__all__ = [
    "Customer",
    "CustomerOverview",
    "Ledger",
    "LedgerState",
    "Loan",
    "LoanStatus",
    "LoanSummary",
    "LoanTerms",
    "Payment",
    "PaymentKind",
    "PaymentReceipt",
]
