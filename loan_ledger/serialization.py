"""JSON-ready rendering of ledger models and boundary responses."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from loan_ledger.exceptions import LoanLedgerError, OverpaymentError, ReconciliationError
from loan_ledger.models import CustomerOverview, Ledger, Loan, PaymentReceipt
from loan_ledger.money import round2

PAYMENT_RECORDED_MESSAGE = "Payment recorded successfully."
INTERNAL_ERROR_MESSAGE = "Internal server error"


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output. Money renders with two decimals."""
    if isinstance(value, Decimal):
        return str(round2(value))
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def loan_to_dict(loan: Loan) -> dict[str, Any]:
    """Response body for a created loan."""
    terms = loan.terms
    return serialize_value({
        "loan_id": loan.loan_id,
        "customer_id": loan.customer_id,
        "principal": terms.principal,
        "interest_rate": str(terms.annual_rate_percent),
        "loan_period_years": terms.period_years,
        "total_interest": terms.interest,
        "total_amount_payable": terms.total_payable,
        "monthly_emi": terms.monthly_emi,
        "status": loan.status,
    })


def receipt_to_dict(receipt: PaymentReceipt) -> dict[str, Any]:
    """Response body for a recorded payment."""
    return serialize_value({
        "payment_id": receipt.payment_id,
        "loan_id": receipt.loan_id,
        "message": PAYMENT_RECORDED_MESSAGE,
        "remaining_balance": receipt.balance,
        "emis_left": receipt.emis_left,
        "status": receipt.status,
    })


def ledger_to_dict(ledger: Ledger) -> dict[str, Any]:
    """Response body for a loan ledger."""
    loan, state = ledger.loan, ledger.state
    return serialize_value({
        "loan_id": loan.loan_id,
        "customer_id": loan.customer_id,
        "principal": loan.terms.principal,
        "total_amount": loan.terms.total_payable,
        "monthly_emi": loan.terms.monthly_emi,
        "amount_paid": state.amount_paid,
        "balance_amount": state.balance,
        "emis_left": state.emis_left,
        "status": state.status,
        "transactions": [
            {
                "transaction_id": p.payment_id,
                "date": p.created_at,
                "amount": p.amount,
                "type": p.kind,
            }
            for p in ledger.transactions
        ],
    })


def overview_to_dict(overview: CustomerOverview) -> dict[str, Any]:
    """Response body for a customer overview."""
    return serialize_value({
        "customer_id": overview.customer_id,
        "total_loans": overview.total_loans,
        "loans": [
            {
                "loan_id": s.loan.loan_id,
                "principal": s.loan.terms.principal,
                "total_amount": s.loan.terms.total_payable,
                "total_interest": s.loan.terms.interest,
                "emi_amount": s.loan.terms.monthly_emi,
                "amount_paid": s.state.amount_paid,
                "balance_amount": s.state.balance,
                "emis_left": s.state.emis_left,
                "status": s.state.status,
            }
            for s in overview.loans
        ],
    })


def error_to_dict(error: LoanLedgerError) -> dict[str, Any]:
    """Response body for a failed request.

    Reconciliation failures are reported as a generic internal error.
    """
    if isinstance(error, ReconciliationError):
        return {"error": INTERNAL_ERROR_MESSAGE}
    body: dict[str, Any] = {"error": str(error)}
    if isinstance(error, OverpaymentError):
        body["remaining_balance"] = serialize_value(error.remaining_balance)
    return body
