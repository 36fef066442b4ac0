"""Customer generator."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import Iterator

from loan_ledger.generators.base import BaseGenerator
from loan_ledger.models import Customer


class CustomerGenerator(BaseGenerator):
    """Generate synthetic customers."""

    def generate(self) -> Customer:
        """Generate a single customer."""
        days_ago = random.randint(0, 3 * 365)
        return Customer(
            customer_id=self.fake.uuid4(),
            name=self.fake.name(),
            created_at=datetime.now(timezone.utc) - timedelta(days=days_ago),
        )

    def generate_batch(self, count: int) -> Iterator[Customer]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        Customer
            Generated customers.
        """
        for _ in range(count):
            yield self.generate()
