"""Custom exception hierarchy for loan-ledger."""

from decimal import Decimal


class LoanLedgerError(Exception):
    """Base exception for all loan-ledger errors."""

    http_status = 500


class InvalidInputError(LoanLedgerError):
    """Raised when a request field is malformed or out of range."""

    http_status = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class EntityNotFoundError(LoanLedgerError):
    """Raised when a referenced customer or loan does not exist."""

    http_status = 404


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class OverpaymentError(LoanLedgerError):
    """Raised when a payment would push cumulative payments past the total payable."""

    http_status = 400

    def __init__(self, remaining_balance: Decimal, amount: Decimal) -> None:
        super().__init__("Payment amount exceeds remaining balance")
        self.remaining_balance = remaining_balance
        self.amount = amount


class ReconciliationError(LoanLedgerError):
    """Raised when a derived ledger breaks an internal invariant.

    The message stays generic; the offending figures are kept as
    attributes for logging and alerting only.
    """

    def __init__(self, loan_id: str | None, amount_paid: Decimal, total_payable: Decimal) -> None:
        super().__init__("Internal ledger error")
        self.loan_id = loan_id
        self.amount_paid = amount_paid
        self.total_payable = total_payable


class ConfigurationError(LoanLedgerError):
    """Raised when configuration is invalid or missing."""
