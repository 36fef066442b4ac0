"""Loan ledger: simple-interest loans, EMI schedules and payment bookkeeping."""

from loan_ledger.calculator import compute_terms
from loan_ledger.ledger import check_payment, emis_left, evaluate
from loan_ledger.service import LoanLedgerService

__all__ = ["LoanLedgerService", "check_payment", "compute_terms", "emis_left", "evaluate"]

__version__ = "0.1.0"
