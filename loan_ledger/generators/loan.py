"""Loan request and payment plan generators."""

from __future__ import annotations

import random
from dataclasses import dataclass
from decimal import Decimal

from loan_ledger.generators.base import BaseGenerator
from loan_ledger.models import LoanTerms, PaymentKind
from loan_ledger.money import CENT, ZERO, round2


@dataclass
class LoanRequest:
    """Arguments for creating a loan."""

    customer_id: str
    principal: Decimal
    period_years: int
    annual_rate_percent: Decimal


@dataclass
class PlannedPayment:
    """A payment to submit against a loan."""

    amount: Decimal
    kind: PaymentKind


class LoanRequestGenerator(BaseGenerator):
    """Generate synthetic loan requests."""

    PERIODS = [1, 2, 3, 5, 7, 10]
    RATE_RANGE = (6.0, 18.0)  # Annual percent
    ZERO_RATE_SHARE = 0.05  # Promotional interest-free loans

    def generate(self, customer_id: str) -> LoanRequest:
        """Generate a loan request for a customer."""
        if random.random() < self.ZERO_RATE_SHARE:
            rate = ZERO
        else:
            rate = Decimal(str(round(random.uniform(*self.RATE_RANGE), 2)))

        return LoanRequest(
            customer_id=customer_id,
            principal=Decimal(random.randint(10, 500) * 1000),
            period_years=random.choice(self.PERIODS),
            annual_rate_percent=rate,
        )


class PaymentPlanGenerator(BaseGenerator):
    """Generate payment sequences that never exceed a loan's total payable."""

    def __init__(self, seed: int | None = None, lump_sum_rate: float = 0.1) -> None:
        super().__init__(seed)
        self.lump_sum_rate = lump_sum_rate

    def plan(self, terms: LoanTerms, paid_fraction: float | None = None) -> list[PlannedPayment]:
        """Plan payments covering ``paid_fraction`` of the total payable.

        Mostly EMIs with the occasional lump sum. The last payment of a
        plan that reaches the full total is a lump sum settling the exact
        remaining balance unless it happens to equal the EMI.

        Parameters
        ----------
        terms : LoanTerms
            Terms of the loan being paid.
        paid_fraction : float | None
            Share of the total payable to pay, 0.0 to 1.0. Random if None.

        Returns
        -------
        list[PlannedPayment]
            Payments in submission order.
        """
        if paid_fraction is None:
            paid_fraction = random.random()
        fraction = Decimal(str(min(max(paid_fraction, 0.0), 1.0)))
        if fraction == 1:
            target = terms.total_payable
        else:
            target = min(round2(terms.total_payable * fraction), terms.total_payable)

        payments: list[PlannedPayment] = []
        paid = ZERO
        while paid < target:
            remaining = target - paid
            if random.random() < self.lump_sum_rate:
                share = Decimal(str(round(random.uniform(0.1, 0.5), 2)))
                amount = max(CENT, round2(remaining * share))
                kind = PaymentKind.LUMP_SUM
            else:
                amount = terms.monthly_emi
                kind = PaymentKind.SCHEDULED

            if amount >= remaining:
                amount = remaining
                if amount != terms.monthly_emi:
                    kind = PaymentKind.LUMP_SUM

            payments.append(PlannedPayment(amount=amount, kind=kind))
            paid += amount

        return payments
