"""Tests for custom exception hierarchy."""

from decimal import Decimal

from loan_ledger.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidInputError,
    LoanLedgerError,
    OverpaymentError,
    ReconciliationError,
    ReferentialIntegrityError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_loan_ledger_error_is_exception(self) -> None:
        assert isinstance(LoanLedgerError("test"), Exception)

    def test_invalid_input_is_loan_ledger_error(self) -> None:
        err = InvalidInputError("principal must be positive", field="principal")
        assert isinstance(err, LoanLedgerError)
        assert err.field == "principal"
        assert err.http_status == 400

    def test_entity_not_found_is_loan_ledger_error(self) -> None:
        err = EntityNotFoundError("Loan x not found")
        assert isinstance(err, LoanLedgerError)
        assert err.http_status == 404

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, LoanLedgerError)

    def test_configuration_error_is_loan_ledger_error(self) -> None:
        assert isinstance(ConfigurationError("test"), LoanLedgerError)


class TestOverpaymentError:
    """Tests for OverpaymentError."""

    def test_carries_remaining_balance(self) -> None:
        err = OverpaymentError(Decimal("115000.00"), Decimal("115000.01"))

        assert err.remaining_balance == Decimal("115000.00")
        assert err.amount == Decimal("115000.01")
        assert err.http_status == 400
        assert str(err) == "Payment amount exceeds remaining balance"


class TestReconciliationError:
    """Tests for ReconciliationError."""

    def test_message_is_generic(self) -> None:
        err = ReconciliationError("loan-1", Decimal("120001.00"), Decimal("120000.00"))

        assert str(err) == "Internal ledger error"
        assert "120001" not in str(err)
        assert err.loan_id == "loan-1"
        assert err.amount_paid == Decimal("120001.00")
        assert err.http_status == 500
