"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from loan_ledger.calculator import compute_terms
from loan_ledger.models import Customer, Loan, LoanStatus, LoanTerms, Payment, PaymentKind
from loan_ledger.service import LoanLedgerService
from loan_ledger.store import InMemoryLoanStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_customer_id() -> str:
    """Sample customer ID."""
    return "cust-test-001"


@pytest.fixture
def sample_loan_id() -> str:
    """Sample loan ID."""
    return "loan-test-001"


@pytest.fixture
def sample_terms() -> LoanTerms:
    """100000 over 2 years at 10%: total 120000, EMI 5000."""
    return compute_terms(100000, 2, 10)


@pytest.fixture
def sample_customer(sample_customer_id: str) -> Customer:
    """Create a sample customer."""
    return Customer(
        customer_id=sample_customer_id,
        name="Test Customer",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_loan(sample_loan_id: str, sample_customer_id: str, sample_terms: LoanTerms) -> Loan:
    """Create a sample loan."""
    return Loan(
        loan_id=sample_loan_id,
        customer_id=sample_customer_id,
        terms=sample_terms,
        status=LoanStatus.ACTIVE,
        created_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_payment(sample_loan_id: str):
    """Factory for payments on the sample loan."""
    counter = iter(range(1, 10_000))

    def _make(amount: str, kind: PaymentKind = PaymentKind.SCHEDULED, minute: int = 0) -> Payment:
        n = next(counter)
        return Payment(
            payment_id=f"pay-{n:04d}",
            loan_id=sample_loan_id,
            amount=Decimal(amount),
            kind=kind,
            created_at=datetime(2024, 2, 1, 0, minute, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def store() -> InMemoryLoanStore:
    """Create a fresh store for each test."""
    return InMemoryLoanStore()


@pytest.fixture
def service(store: InMemoryLoanStore) -> LoanLedgerService:
    """Service over a fresh in-memory store."""
    return LoanLedgerService(store)
