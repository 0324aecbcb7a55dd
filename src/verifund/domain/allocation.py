"""FIFO allocation of reimbursements to donations.

A reimbursement is attributed to donations oldest first: each donation's
unspent ``remaining`` is drawn down in order of ``created_at`` until the
reimbursement amount is covered or the donations run out. This module is
pure; it reads entities and returns new values without touching storage.
"""

from decimal import Decimal, localcontext
from typing import Iterable

from verifund.domain.entities import AllocationEntry, Donation
from verifund.domain.precision import AMOUNT_CONTEXT


def fifo_order(donations: Iterable[Donation]) -> list[Donation]:
    """Return donations with a positive remaining balance, oldest first.

    Donations sharing a timestamp are ordered by id so the result never
    depends on input order.
    """
    available = [d for d in donations if d.remaining > 0]
    return sorted(available, key=lambda d: (d.created_at, d.id))


def percentage_of(part: Decimal, whole: Decimal) -> float:
    """Percentage of ``whole`` that ``part`` represents, for display."""
    if whole == 0:
        return 0.0
    return float(part / whole * 100)


def allocate(donations: Iterable[Donation], reimbursement_amount: Decimal) -> list[AllocationEntry]:
    """Allocate a reimbursement across donations, oldest money first.

    Args:
        donations: Current donations, in any order
        reimbursement_amount: Amount to attribute; callers validate it is positive

    Returns:
        Allocation entries in the order the donations were consumed. The
        sum of ``amount_spent`` is the smaller of the reimbursement amount
        and the total remaining across all donations; any excess is left
        unallocated.
    """
    entries: list[AllocationEntry] = []
    to_allocate = reimbursement_amount

    for donation in fifo_order(donations):
        if to_allocate <= 0:
            break

        drawn = min(donation.remaining, to_allocate)
        entries.append(
            AllocationEntry(
                donation_id=donation.id,
                email=donation.email,
                wallet_address=donation.wallet_address,
                original_amount=donation.amount,
                amount_spent=drawn,
                percentage_spent=percentage_of(drawn, donation.amount),
                remaining_before=donation.remaining,
            )
        )
        with localcontext(AMOUNT_CONTEXT):
            to_allocate -= drawn

    return entries


def total_allocated(entries: Iterable[AllocationEntry]) -> Decimal:
    """Sum of ``amount_spent`` across allocation entries."""
    with localcontext(AMOUNT_CONTEXT):
        return sum((e.amount_spent for e in entries), Decimal(0))


def total_remaining(donations: Iterable[Donation]) -> Decimal:
    """Sum of unspent balances across donations."""
    with localcontext(AMOUNT_CONTEXT):
        return sum((d.remaining for d in donations if d.remaining > 0), Decimal(0))
