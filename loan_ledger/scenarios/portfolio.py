"""Portfolio scenario: seeds a ledger with customers, loans and payments."""

from __future__ import annotations

import logging
import random
from typing import Any

from loan_ledger.generators import CustomerGenerator, LoanRequestGenerator, PaymentPlanGenerator
from loan_ledger.models import LoanStatus
from loan_ledger.money import ZERO, round2
from loan_ledger.service import LoanLedgerService
from loan_ledger.store import InMemoryLoanStore, LoanStore

logger = logging.getLogger(__name__)


class PortfolioScenario:
    """Generate a loan portfolio through the ledger service.

    This scenario creates:
    - Customers with Faker names
    - One or more simple-interest loans per customer
    - Payment histories: some loans settled in full, the rest part-paid
    """

    def __init__(
        self,
        num_customers: int = 100,
        max_loans_per_customer: int = 2,
        payoff_rate: float = 0.2,
        seed: int | None = None,
        locale: str = "en_IN",
        *,
        store: LoanStore | None = None,
    ) -> None:
        """Initialize portfolio scenario.

        Parameters
        ----------
        num_customers : int
            Number of customers to generate.
        max_loans_per_customer : int
            Each customer gets between 1 and this many loans.
        payoff_rate : float
            Share of loans paid off in full (0.0 to 1.0).
        seed : int | None
            Random seed for reproducibility.
        locale : str
            Faker locale for customer names.
        store : LoanStore | None
            Store to seed. A fresh in-memory store if None.
        """
        self.num_customers = num_customers
        self.max_loans_per_customer = max_loans_per_customer
        self.payoff_rate = payoff_rate
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.store = store if store is not None else InMemoryLoanStore()
        self.service = LoanLedgerService(self.store)
        self._customer_gen = CustomerGenerator(seed=seed, locale=locale)
        self._loan_gen = LoanRequestGenerator(seed=seed)
        self._plan_gen = PaymentPlanGenerator(seed=seed)
        self._customer_ids: list[str] = []

    def generate(self) -> LoanStore:
        """Generate all data for the scenario.

        Returns
        -------
        LoanStore
            Store containing the generated portfolio.
        """
        logger.info(
            "Starting portfolio scenario: %d customers, %.0f%% payoff rate",
            self.num_customers,
            self.payoff_rate * 100,
        )

        for generated in self._customer_gen.generate_batch(self.num_customers):
            customer = self.service.ensure_customer(generated.customer_id, generated.name)
            self._customer_ids.append(customer.customer_id)

            for _ in range(random.randint(1, self.max_loans_per_customer)):
                request = self._loan_gen.generate(customer.customer_id)
                loan = self.service.open_loan(
                    request.customer_id,
                    request.principal,
                    request.period_years,
                    request.annual_rate_percent,
                )

                paid_fraction = 1.0 if random.random() < self.payoff_rate else random.uniform(0.0, 0.9)
                for planned in self._plan_gen.plan(loan.terms, paid_fraction):
                    self.service.record_payment(loan.loan_id, planned.amount, planned.kind)

        logger.info("Generated portfolio: %s", self.store.summary())
        return self.store

    def get_portfolio_summary(self) -> dict[str, Any]:
        """Get summary statistics for the generated portfolio.

        Returns
        -------
        dict[str, Any]
            Portfolio summary statistics.
        """
        summaries = [
            summary
            for customer_id in self._customer_ids
            for summary in self.service.get_customer_overview(customer_id).loans
        ]
        if not summaries:
            return {}

        total_principal = sum((s.loan.terms.principal for s in summaries), ZERO)
        total_payable = sum((s.loan.terms.total_payable for s in summaries), ZERO)
        amount_paid = sum((s.state.amount_paid for s in summaries), ZERO)
        total_emi = sum((s.loan.terms.monthly_emi for s in summaries), ZERO)

        status_counts: dict[str, int] = {}
        for s in summaries:
            status_counts[s.state.status.value] = status_counts.get(s.state.status.value, 0) + 1

        return {
            "customers": len(self._customer_ids),
            "total_loans": len(summaries),
            "total_principal": str(round2(total_principal)),
            "total_payable": str(round2(total_payable)),
            "amount_paid": str(round2(amount_paid)),
            "outstanding": str(round2(total_payable - amount_paid)),
            "collection_rate": float(amount_paid / total_payable) if total_payable else 0.0,
            "loan_status_distribution": status_counts,
            "paid_off_loans": status_counts.get(LoanStatus.PAID_OFF.value, 0),
            "average_emi": str(round2(total_emi / len(summaries))),
        }
