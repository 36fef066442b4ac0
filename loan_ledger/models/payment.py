"""Payment model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from loan_ledger.models.enums import PaymentKind


@dataclass(frozen=True)
class Payment:
    """A recorded payment. Never mutated once appended."""

    payment_id: str
    loan_id: str
    amount: Decimal
    kind: PaymentKind
    created_at: datetime
