"""Ledger service: the boundary operations over an injected store."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from loan_ledger.calculator import compute_terms
from loan_ledger.exceptions import EntityNotFoundError, InvalidInputError, OverpaymentError
from loan_ledger.ledger import check_payment, evaluate
from loan_ledger.models import (
    Customer,
    CustomerOverview,
    Ledger,
    Loan,
    LoanStatus,
    LoanSummary,
    Payment,
    PaymentKind,
    PaymentReceipt,
)
from loan_ledger.store.base import LoanStore

logger = logging.getLogger(__name__)

# Legacy name for scheduled payments still sent by older clients
KIND_ALIASES = {"EMI": PaymentKind.SCHEDULED}


def parse_payment_kind(kind: Any) -> PaymentKind:
    """Resolve a payment kind from an enum member or its name."""
    if isinstance(kind, PaymentKind):
        return kind
    if isinstance(kind, str):
        name = kind.strip().upper()
        if name in KIND_ALIASES:
            return KIND_ALIASES[name]
        try:
            return PaymentKind(name)
        except ValueError:
            pass
    raise InvalidInputError("payment kind must be SCHEDULED or LUMP_SUM", field="kind")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class LoanLedgerService:
    """Create loans, record payments and serve ledger views.

    Parameters
    ----------
    store : LoanStore
        Repository holding customers, loans and payments.
    """

    def __init__(self, store: LoanStore) -> None:
        self.store = store

    def ensure_customer(self, customer_id: str, name: str | None = None) -> Customer:
        """Return an existing customer, creating it when a name is given."""
        if not isinstance(customer_id, str) or not customer_id.strip():
            raise InvalidInputError("customer_id is required", field="customer_id")

        customer = self.store.get_customer(customer_id)
        if customer is not None:
            return customer

        if not name or not name.strip():
            raise InvalidInputError("Customer name is required for new customers", field="customer_name")

        customer = Customer(customer_id=customer_id, name=name.strip(), created_at=_now())
        self.store.create_customer(customer)
        logger.info("New customer created: %s - %s", customer.customer_id, customer.name)
        return customer

    def create_loan(
        self,
        customer_id: str,
        principal: Any,
        period_years: Any,
        annual_rate_percent: Any,
        customer_name: str | None = None,
    ) -> Loan:
        """Create a loan, registering the customer first if needed."""
        # Validate terms before touching the store so a bad request creates nothing
        compute_terms(principal, period_years, annual_rate_percent)
        customer = self.ensure_customer(customer_id, customer_name)
        return self.open_loan(customer.customer_id, principal, period_years, annual_rate_percent)

    def open_loan(
        self,
        customer_id: str,
        principal: Any,
        period_years: Any,
        annual_rate_percent: Any,
    ) -> Loan:
        """Create a loan for a customer that already exists."""
        terms = compute_terms(principal, period_years, annual_rate_percent)
        if self.store.get_customer(customer_id) is None:
            raise EntityNotFoundError(f"Customer {customer_id} not found")

        loan = Loan(
            loan_id=str(uuid.uuid4()),
            customer_id=customer_id,
            terms=terms,
            status=LoanStatus.ACTIVE,
            created_at=_now(),
        )
        self.store.add_loan(loan)
        logger.info(
            "Loan %s created for customer %s: total payable %s, EMI %s",
            loan.loan_id,
            customer_id,
            terms.total_payable,
            terms.monthly_emi,
        )
        return loan

    def record_payment(self, loan_id: str, amount: Any, kind: Any) -> PaymentReceipt:
        """Validate and append a payment, closing the loan when it is settled.

        Validation, the append and the status change run in one loan
        transaction, so concurrent payments on a loan cannot jointly
        overshoot the total payable.

        Raises
        ------
        InvalidInputError
            If the amount or kind is invalid.
        EntityNotFoundError
            If the loan does not exist.
        OverpaymentError
            If the payment exceeds the remaining balance.
        """
        kind = parse_payment_kind(kind)

        with self.store.loan_transaction(loan_id) as tx:
            current = evaluate(tx.loan.terms, tx.payments, loan_id=loan_id)
            try:
                amount = check_payment(tx.loan.terms, current.amount_paid, amount)
            except OverpaymentError as e:
                logger.warning(
                    "Rejected payment of %s on loan %s: remaining balance %s",
                    e.amount,
                    loan_id,
                    e.remaining_balance,
                    extra={"context": {"loan_id": loan_id, "amount": e.amount, "remaining_balance": e.remaining_balance}},
                )
                raise

            payment = Payment(
                payment_id=str(uuid.uuid4()),
                loan_id=loan_id,
                amount=amount,
                kind=kind,
                created_at=_now(),
            )
            tx.append_payment(payment)

            state = evaluate(tx.loan.terms, tx.all_payments, loan_id=loan_id)
            if state.status == LoanStatus.PAID_OFF:
                tx.mark_paid_off()

        context = {
            "loan_id": loan_id,
            "payment_id": payment.payment_id,
            "amount": amount,
            "remaining_balance": state.balance,
        }
        logger.info(
            "Payment %s of %s recorded on loan %s", payment.payment_id, amount, loan_id, extra={"context": context}
        )
        if tx.paid_off:
            logger.info("Loan %s paid off", loan_id, extra={"context": context})

        return PaymentReceipt(
            payment_id=payment.payment_id,
            loan_id=loan_id,
            balance=state.balance,
            emis_left=state.emis_left,
            status=state.status,
        )

    def get_ledger(self, loan_id: str) -> Ledger:
        """Return the loan, its derived state and its transactions, oldest first."""
        loan = self._get_loan(loan_id)
        payments = self.store.get_payments(loan_id)
        return Ledger(loan=loan, state=evaluate(loan.terms, payments, loan_id=loan_id), transactions=payments)

    def get_customer_overview(self, customer_id: str) -> CustomerOverview:
        """Summaries of every loan a customer holds."""
        loans = self.store.get_customer_loans(customer_id)
        if not loans:
            raise EntityNotFoundError(f"Customer {customer_id} not found or has no loans")

        summaries = [
            LoanSummary(
                loan=loan,
                state=evaluate(loan.terms, self.store.get_payments(loan.loan_id), loan_id=loan.loan_id),
            )
            for loan in loans
        ]
        return CustomerOverview(customer_id=customer_id, loans=summaries)

    def _get_loan(self, loan_id: str) -> Loan:
        loan = self.store.get_loan(loan_id)
        if loan is None:
            raise EntityNotFoundError(f"Loan {loan_id} not found")
        return loan
