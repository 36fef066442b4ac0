"""Enumeration types for ledger entities."""

from enum import Enum


class LoanStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAID_OFF = "PAID_OFF"


class PaymentKind(str, Enum):
    SCHEDULED = "SCHEDULED"
    LUMP_SUM = "LUMP_SUM"
