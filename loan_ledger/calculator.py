"""Loan calculator: fixed-rate simple interest and EMI."""

from decimal import Decimal
from typing import Any

from loan_ledger.exceptions import InvalidInputError
from loan_ledger.models.loan import LoanTerms
from loan_ledger.money import MAX_MONEY, ZERO, round2, to_decimal, to_money

MONTHS_PER_YEAR = 12


def compute_terms(principal: Any, period_years: Any, annual_rate_percent: Any) -> LoanTerms:
    """Compute the immutable terms of a loan.

    Interest is simple interest on the original principal for the whole
    term. Interest and the total payable keep their exact decimal value; only
    the EMI is rounded, half away from zero, to cents. The final instalment
    therefore settles whatever the rounded EMIs leave over.

    Parameters
    ----------
    principal : Any
        Amount borrowed; positive, at most 2 decimal places.
    period_years : Any
        Term length; positive ``int``.
    annual_rate_percent : Any
        Yearly rate in percent (``10`` means 10%); non-negative.

    Returns
    -------
    LoanTerms
        Frozen loan terms.

    Raises
    ------
    InvalidInputError
        If any argument is out of range.
    """
    principal = to_money(principal, "principal")
    if principal <= ZERO:
        raise InvalidInputError("principal must be positive", field="principal")

    if isinstance(period_years, bool) or not isinstance(period_years, int):
        raise InvalidInputError("period_years must be an integer", field="period_years")
    if period_years <= 0:
        raise InvalidInputError("period_years must be positive", field="period_years")

    rate = to_decimal(annual_rate_percent, "annual_rate_percent")
    if rate < ZERO:
        raise InvalidInputError("annual_rate_percent must not be negative", field="annual_rate_percent")

    interest = principal * period_years * rate / Decimal(100)
    total_payable = principal + interest
    if total_payable > MAX_MONEY:
        raise InvalidInputError("loan total exceeds the supported range", field="annual_rate_percent")

    monthly_emi = round2(total_payable / (period_years * MONTHS_PER_YEAR))
    if monthly_emi <= ZERO:
        raise InvalidInputError("principal is too small for the loan period", field="principal")

    return LoanTerms(
        principal=principal,
        annual_rate_percent=rate,
        period_years=period_years,
        interest=interest,
        total_payable=total_payable,
        monthly_emi=monthly_emi,
    )
