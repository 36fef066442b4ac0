"""Customer model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Customer:
    """Bank customer entity."""

    customer_id: str  # Supplied by the caller
    name: str
    created_at: datetime
