"""PostgreSQL loan store using psycopg."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import psycopg
from psycopg import errors
from psycopg.rows import dict_row

from loan_ledger.exceptions import EntityNotFoundError, InvalidInputError, ReferentialIntegrityError
from loan_ledger.models import Customer, Loan, LoanStatus, LoanTerms, Payment, PaymentKind
from loan_ledger.store.base import LoanStore, LoanTransaction

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS customers (
    customer_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL
);

CREATE TABLE IF NOT EXISTS loans (
    loan_id TEXT PRIMARY KEY,
    customer_id TEXT NOT NULL REFERENCES customers (customer_id),
    principal_amount NUMERIC(18, 2) NOT NULL,
    interest_rate NUMERIC NOT NULL,
    loan_period_years INTEGER NOT NULL,
    interest NUMERIC NOT NULL,
    total_amount NUMERIC NOT NULL,
    monthly_emi NUMERIC(18, 2) NOT NULL,
    status TEXT NOT NULL DEFAULT 'ACTIVE',
    created_at TIMESTAMPTZ NOT NULL
);

CREATE TABLE IF NOT EXISTS payments (
    seq BIGSERIAL,
    payment_id TEXT PRIMARY KEY,
    loan_id TEXT NOT NULL REFERENCES loans (loan_id),
    amount NUMERIC NOT NULL CHECK (amount > 0),
    payment_type TEXT NOT NULL,
    payment_date TIMESTAMPTZ NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_loans_customer ON loans (customer_id);
CREATE INDEX IF NOT EXISTS idx_payments_loan ON payments (loan_id, payment_date, seq);
"""

LOAN_COLUMNS = (
    "loan_id, customer_id, principal_amount, interest_rate, loan_period_years, "
    "interest, total_amount, monthly_emi, status, created_at"
)

PAYMENT_COLUMNS = "payment_id, loan_id, amount, payment_type, payment_date"


class PostgresLoanStore(LoanStore):
    """Loan store backed by PostgreSQL.

    Every call opens its own connection. ``loan_transaction`` holds a
    row lock on the loan (``SELECT ... FOR UPDATE``) for the lifetime of
    the unit of work, so concurrent payments on one loan are serialized
    by the database.
    """

    def __init__(self, conninfo: str) -> None:
        self.conninfo = conninfo

    def _connect(self) -> psycopg.Connection:
        return psycopg.connect(self.conninfo, row_factory=dict_row)

    def initialize(self) -> None:
        """Create tables and indexes if they do not exist."""
        with self._connect() as conn:
            conn.execute(SCHEMA)
        logger.info("Database schema initialized")

    def get_customer(self, customer_id: str) -> Customer | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT customer_id, name, created_at FROM customers WHERE customer_id = %s",
                (customer_id,),
            ).fetchone()
        return Customer(**row) if row else None

    def create_customer(self, customer: Customer) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO customers (customer_id, name, created_at) VALUES (%s, %s, %s)",
                    (customer.customer_id, customer.name, customer.created_at),
                )
        except errors.UniqueViolation:
            raise InvalidInputError(
                f"Customer {customer.customer_id} already exists", field="customer_id"
            ) from None

    def add_loan(self, loan: Loan) -> None:
        terms = loan.terms
        try:
            with self._connect() as conn:
                conn.execute(
                    f"INSERT INTO loans ({LOAN_COLUMNS}) "
                    "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                    (
                        loan.loan_id,
                        loan.customer_id,
                        terms.principal,
                        terms.annual_rate_percent,
                        terms.period_years,
                        terms.interest,
                        terms.total_payable,
                        terms.monthly_emi,
                        loan.status.value,
                        loan.created_at,
                    ),
                )
        except errors.ForeignKeyViolation:
            raise ReferentialIntegrityError(f"Customer {loan.customer_id} not found") from None

    def get_loan(self, loan_id: str) -> Loan | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {LOAN_COLUMNS} FROM loans WHERE loan_id = %s", (loan_id,)
            ).fetchone()
        return _row_to_loan(row) if row else None

    def get_customer_loans(self, customer_id: str) -> list[Loan]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {LOAN_COLUMNS} FROM loans WHERE customer_id = %s ORDER BY created_at, loan_id",
                (customer_id,),
            ).fetchall()
        return [_row_to_loan(row) for row in rows]

    def get_payments(self, loan_id: str) -> list[Payment]:
        with self._connect() as conn:
            return self._fetch_payments(conn, loan_id)

    @contextmanager
    def loan_transaction(self, loan_id: str) -> Iterator[LoanTransaction]:
        with self._connect() as conn:
            with conn.transaction():
                row = conn.execute(
                    f"SELECT {LOAN_COLUMNS} FROM loans WHERE loan_id = %s FOR UPDATE",
                    (loan_id,),
                ).fetchone()
                if row is None:
                    raise EntityNotFoundError(f"Loan {loan_id} not found")

                tx = LoanTransaction(loan=_row_to_loan(row), payments=self._fetch_payments(conn, loan_id))
                yield tx
                self._commit(conn, tx)

        if tx.paid_off:
            tx.loan.status = LoanStatus.PAID_OFF

    def _commit(self, conn: psycopg.Connection, tx: LoanTransaction) -> None:
        for payment in tx.new_payments:
            conn.execute(
                f"INSERT INTO payments ({PAYMENT_COLUMNS}) VALUES (%s, %s, %s, %s, %s)",
                (
                    payment.payment_id,
                    payment.loan_id,
                    payment.amount,
                    payment.kind.value,
                    payment.created_at,
                ),
            )
        if tx.paid_off:
            conn.execute(
                "UPDATE loans SET status = %s WHERE loan_id = %s",
                (LoanStatus.PAID_OFF.value, tx.loan.loan_id),
            )

    def _fetch_payments(self, conn: psycopg.Connection, loan_id: str) -> list[Payment]:
        rows = conn.execute(
            f"SELECT {PAYMENT_COLUMNS} FROM payments WHERE loan_id = %s ORDER BY payment_date, seq",
            (loan_id,),
        ).fetchall()
        return [_row_to_payment(row) for row in rows]

    def summary(self) -> dict[str, int]:
        counts = {}
        with self._connect() as conn:
            for table in ("customers", "loans", "payments"):
                row = conn.execute(f"SELECT COUNT(*) AS n FROM {table}").fetchone()  # noqa: S608
                counts[table] = row["n"]
        return counts


def _row_to_loan(row: dict[str, Any]) -> Loan:
    return Loan(
        loan_id=row["loan_id"],
        customer_id=row["customer_id"],
        terms=LoanTerms(
            principal=row["principal_amount"],
            annual_rate_percent=row["interest_rate"],
            period_years=row["loan_period_years"],
            interest=row["interest"],
            total_payable=row["total_amount"],
            monthly_emi=row["monthly_emi"],
        ),
        status=LoanStatus(row["status"]),
        created_at=row["created_at"],
    )


def _row_to_payment(row: dict[str, Any]) -> Payment:
    return Payment(
        payment_id=row["payment_id"],
        loan_id=row["loan_id"],
        amount=row["amount"],
        kind=PaymentKind(row["payment_type"]),
        created_at=row["payment_date"],
    )
