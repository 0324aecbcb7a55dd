"""Domain model entities for verifund.

These are pure data classes representing ledger concepts, independent of
database schema. The allocator and services only ever see these types,
so the storage backend can change without touching the accounting logic.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, localcontext
from typing import Optional

from verifund.domain.precision import AMOUNT_CONTEXT


@dataclass(frozen=True)
class Donor:
    """Donor domain entity: one email mapped to one wallet."""

    email: str
    wallet_address: str
    created_at: datetime


@dataclass(frozen=True)
class Donation:
    """Donation domain entity.

    ``remaining`` is the unspent part of ``amount``; it only decreases.
    """

    id: str
    email: str
    wallet_address: str
    amount: Decimal
    tx_hash: str
    ordinal: int
    created_at: datetime
    remaining: Decimal


@dataclass(frozen=True)
class Reimbursement:
    """Reimbursement domain entity.

    ``allocated_at`` is set once the FIFO allocation for this
    reimbursement has been applied to the donations.
    """

    id: str
    amount: Decimal
    tx_hash: str
    ordinal: int
    invoice_text: str
    created_at: datetime
    allocated_at: Optional[datetime] = None

    @property
    def allocation_applied(self) -> bool:
        return self.allocated_at is not None


@dataclass(frozen=True)
class AllocationEntry:
    """One donation drawn by one allocation."""

    donation_id: str
    email: str
    wallet_address: str
    original_amount: Decimal
    amount_spent: Decimal
    percentage_spent: float
    remaining_before: Decimal

    @property
    def remaining_after(self) -> Decimal:
        with localcontext(AMOUNT_CONTEXT):
            return self.remaining_before - self.amount_spent


@dataclass(frozen=True)
class PoolBalance:
    """Aggregate totals across all donations."""

    donation_count: int
    total_donated: Decimal
    total_remaining: Decimal

    @property
    def total_spent(self) -> Decimal:
        with localcontext(AMOUNT_CONTEXT):
            return self.total_donated - self.total_remaining
