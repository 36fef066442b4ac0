"""Synthetic data generators for the loan ledger."""

from loan_ledger.generators.customer import CustomerGenerator
from loan_ledger.generators.loan import (
    LoanRequest,
    LoanRequestGenerator,
    PaymentPlanGenerator,
    PlannedPayment,
)

__all__ = [
    "CustomerGenerator",
    "LoanRequest",
    "LoanRequestGenerator",
    "PaymentPlanGenerator",
    "PlannedPayment",
]
