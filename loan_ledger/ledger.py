"""Ledger evaluator: derives loan state from frozen terms and payments."""

import logging
from decimal import Decimal
from typing import Any, Iterable

from loan_ledger.exceptions import InvalidInputError, OverpaymentError, ReconciliationError
from loan_ledger.models.enums import LoanStatus
from loan_ledger.models.ledger import LedgerState
from loan_ledger.models.loan import LoanTerms
from loan_ledger.models.payment import Payment
from loan_ledger.money import ZERO, ceil_div, to_decimal, to_money

logger = logging.getLogger(__name__)


def emis_left(balance: Decimal, monthly_emi: Decimal) -> int:
    """Instalments still needed; a partial remainder counts as one."""
    if balance <= ZERO:
        return 0
    return ceil_div(balance, monthly_emi)


def evaluate(
    terms: LoanTerms,
    payments: Iterable[Payment],
    *,
    loan_id: str | None = None,
) -> LedgerState:
    """Fold a payment history over the loan terms.

    Parameters
    ----------
    terms : LoanTerms
        Frozen loan terms.
    payments : Iterable[Payment]
        Recorded payments, in any order.
    loan_id : str | None
        Used only to identify the loan in logs.

    Returns
    -------
    LedgerState
        Amount paid, balance, EMIs left and status.

    Raises
    ------
    ReconciliationError
        If payments exceed the total payable.
    """
    amount_paid = sum((p.amount for p in payments), ZERO)
    balance = terms.total_payable - amount_paid

    if balance < ZERO:
        logger.critical(
            "Ledger reconciliation failed for loan %s: paid %s of %s",
            loan_id,
            amount_paid,
            terms.total_payable,
            extra={"context": {"loan_id": loan_id, "amount_paid": amount_paid, "total_payable": terms.total_payable}},
        )
        raise ReconciliationError(loan_id, amount_paid, terms.total_payable)

    return LedgerState(
        amount_paid=amount_paid,
        balance=balance,
        emis_left=emis_left(balance, terms.monthly_emi),
        status=LoanStatus.PAID_OFF if balance == ZERO else LoanStatus.ACTIVE,
    )


def check_payment(terms: LoanTerms, amount_paid: Decimal, amount: Any) -> Decimal:
    """Validate a payment against the amount already paid.

    Amounts are whole cents, except a payment equal to the exact remaining
    balance, which may carry the sub-cent part of the simple interest.

    Returns
    -------
    Decimal
        The payment amount, normalized to cents or to the remaining balance.

    Raises
    ------
    InvalidInputError
        If the amount is not positive, out of range, or has sub-cent precision
        without settling the loan.
    OverpaymentError
        If the payment would take cumulative payments past the total payable.
    """
    remaining = terms.total_payable - amount_paid
    amount = to_decimal(amount, "amount")
    if amount == remaining:
        amount = remaining
    else:
        amount = to_money(amount, "amount")
    if amount <= ZERO:
        raise InvalidInputError("amount must be positive", field="amount")

    if amount > remaining:
        raise OverpaymentError(remaining, amount)

    return amount
