"""Read-only ledger queries and allocation previews."""

from decimal import Decimal, localcontext
from typing import Optional
from verifund.database.base import Database
from verifund.domain.allocation import allocate, total_remaining
from verifund.domain.entities import AllocationEntry, Donation, PoolBalance, Reimbursement
from verifund.domain.errors import NotFoundError, donation_not_found
from verifund.domain.precision import AMOUNT_CONTEXT
from verifund.utils.amount_parser import parse_positive_amount


class LedgerQueryService:
    """Service for reading the ledger without changing it."""

    def __init__(self, db: Database):
        """Initialize query service.

        Args:
            db: Database instance
        """
        self.db = db

    def preview_allocation(self, amount: str | Decimal) -> list[AllocationEntry]:
        """Compute the allocation a reimbursement would get right now.

        Uses the same allocator and the same donation snapshot as
        ``ReimbursementProcessor`` but writes nothing. The result is stale
        as soon as another writer changes the ledger.

        Raises:
            ValidationError: If amount is not a positive decimal
        """
        parsed = parse_positive_amount(amount)
        return allocate(self.db.list_donations(), parsed)

    def list_donations(self, email: Optional[str] = None) -> list[Donation]:
        """List donations newest first, optionally for one donor email."""
        if email is not None:
            email = email.strip()
        return self.db.list_donations(email=email)

    def get_donation(self, donation_id: str) -> Donation:
        """Get donation by ID.

        Raises:
            NotFoundError: If the donation does not exist
        """
        donation = self.db.get_donation(donation_id)
        if donation is None:
            raise NotFoundError(donation_not_found(donation_id))
        return donation

    def list_reimbursements(self) -> list[Reimbursement]:
        """List reimbursements newest first."""
        return self.db.list_reimbursements()

    def pool_balance(self) -> PoolBalance:
        """Totals of donated and unspent funds across all donations."""
        donations = self.db.list_donations()
        with localcontext(AMOUNT_CONTEXT):
            total_donated = sum((d.amount for d in donations), Decimal(0))
        return PoolBalance(
            donation_count=len(donations),
            total_donated=total_donated,
            total_remaining=total_remaining(donations),
        )
