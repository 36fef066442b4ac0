"""Loan models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from loan_ledger.models.enums import LoanStatus


@dataclass(frozen=True)
class LoanTerms:
    """Immutable terms fixed when the loan is created."""

    principal: Decimal
    annual_rate_percent: Decimal
    period_years: int
    interest: Decimal  # Simple interest over the whole term
    total_payable: Decimal  # principal + interest
    monthly_emi: Decimal  # total_payable / months, rounded to cents

    @property
    def months(self) -> int:
        return self.period_years * 12


@dataclass
class Loan:
    """Loan contract entity."""

    loan_id: str
    customer_id: str
    terms: LoanTerms
    status: LoanStatus
    created_at: datetime
