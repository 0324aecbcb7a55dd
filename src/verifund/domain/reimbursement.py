"""Reimbursement processing: record, allocate FIFO, apply, notify."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, localcontext
from typing import Callable, Optional
from verifund.database.base import Database
from verifund.domain.allocation import allocate, total_allocated
from verifund.domain.entities import AllocationEntry, Reimbursement
from verifund.domain.errors import (
    AllocationShortfallError,
    ConcurrentModificationError,
    ConflictError,
    ValidationError,
    record_mismatch,
)
from verifund.domain.notifications import (
    DeliveryResult,
    NotificationIntent,
    NotificationSink,
    build_notification_intents,
    dispatch_notifications,
)
from verifund.domain.precision import AMOUNT_CONTEXT
from verifund.logging_setup import get_logger
from verifund.utils.amount_parser import parse_positive_amount
from verifund.utils.identity import make_record_id

logger = get_logger(__name__)

DEFAULT_MAX_RETRIES = 5


@dataclass(frozen=True)
class ReimbursementResult:
    """Outcome of processing one reimbursement."""

    reimbursement: Reimbursement
    entries: list[AllocationEntry]
    unallocated: Decimal = Decimal(0)
    already_applied: bool = False
    notifications: list[NotificationIntent] = field(default_factory=list)
    deliveries: list[DeliveryResult] = field(default_factory=list)

    @property
    def total_allocated(self) -> Decimal:
        return total_allocated(self.entries)

    @property
    def donors_affected(self) -> int:
        return len({entry.email.lower() for entry in self.entries})

    @property
    def notifications_sent(self) -> int:
        return sum(1 for d in self.deliveries if d.success)

    @property
    def notifications_failed(self) -> int:
        return sum(1 for d in self.deliveries if not d.success)


class ReimbursementProcessor:
    """Attributes reimbursements to donations, oldest money first.

    The read-allocate-write cycle is optimistic: donations are read
    without a lock, and ``Database.apply_allocation`` only commits if no
    touched donation changed in between. On a conflict the cycle is
    re-run against fresh balances, up to ``max_retries`` times.
    """

    def __init__(
        self,
        db: Database,
        notifier: Optional[NotificationSink] = None,
        strict: bool = False,
        max_retries: int = DEFAULT_MAX_RETRIES,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize reimbursement processor.

        Args:
            db: Database instance
            notifier: Sink receiving one intent per allocation entry; when
                None, intents are built but not delivered
            strict: If True, refuse to allocate a reimbursement larger than
                the unspent donations instead of allocating what is available
            max_retries: Attempts at the read-allocate-write cycle before a
                ConcurrentModificationError is surfaced
            clock: Optional callable returning timestamps for new records
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.db = db
        self.notifier = notifier
        self.strict = strict
        self.max_retries = max_retries
        self.clock = clock

    def _now(self) -> Optional[datetime]:
        return self.clock() if self.clock else None

    def process_reimbursement(
        self,
        amount: str | Decimal,
        tx_hash: str,
        ordinal: int,
        invoice_text: str,
    ) -> ReimbursementResult:
        """Record a reimbursement and attribute it to donations.

        Processing the same (tx_hash, ordinal) again does not re-apply the
        allocation; the stored reimbursement is returned with
        ``already_applied`` set and no entries. A reimbursement recorded by
        an earlier call that failed before its allocation was applied is
        resumed.

        Args:
            amount: Reimbursed amount, must be positive
            tx_hash: Source transaction hash
            ordinal: Block number of the source event
            invoice_text: Description of the expense

        Returns:
            ReimbursementResult with the reimbursement, allocation entries
            and notification outcomes

        Raises:
            ValidationError: If any input is invalid
            ConflictError: If the id exists with a different amount
            AllocationShortfallError: In strict mode, if donations cannot
                cover the amount (nothing is allocated)
            ConcurrentModificationError: If every attempt lost a race
        """
        parsed = parse_positive_amount(amount)
        invoice_text = (invoice_text or "").strip()
        if not invoice_text:
            raise ValidationError("Invoice description is required")
        reimbursement_id = make_record_id(tx_hash, ordinal)

        reimbursement = self._record(reimbursement_id, parsed, tx_hash.strip(), ordinal, invoice_text)
        if reimbursement.allocation_applied:
            return self._already_applied(reimbursement)

        for attempt in range(1, self.max_retries + 1):
            entries = allocate(self.db.list_donations(), parsed)
            allocated = total_allocated(entries)
            with localcontext(AMOUNT_CONTEXT):
                unallocated = parsed - allocated

            if unallocated > 0:
                if self.strict:
                    raise AllocationShortfallError(requested=parsed, available=allocated)
                logger.warning(
                    "Reimbursement %s exceeds unspent donations; %s left unallocated",
                    reimbursement_id,
                    unallocated,
                )

            try:
                reimbursement = self.db.apply_allocation(
                    reimbursement_id, entries, applied_at=self._now()
                )
            except ConcurrentModificationError as exc:
                current = self.db.get_reimbursement(reimbursement_id)
                if current is not None and current.allocation_applied:
                    return self._already_applied(current)
                logger.warning(
                    "%s; retrying (attempt %d of %d)", exc, attempt, self.max_retries
                )
                continue

            logger.info(
                "Applied reimbursement %s: %s allocated across %d donation(s)",
                reimbursement_id,
                allocated,
                len(entries),
            )
            return self._notify(reimbursement, entries, unallocated)

        raise ConcurrentModificationError(
            f"Could not apply reimbursement {reimbursement_id} after "
            f"{self.max_retries} attempts; donations kept changing"
        )

    def _record(
        self, reimbursement_id: str, amount: Decimal, tx_hash: str, ordinal: int, invoice_text: str
    ) -> Reimbursement:
        existing = self.db.get_reimbursement(reimbursement_id)
        if existing is None:
            try:
                created = self.db.create_reimbursement(
                    reimbursement_id=reimbursement_id,
                    amount=amount,
                    tx_hash=tx_hash,
                    ordinal=ordinal,
                    invoice_text=invoice_text,
                    created_at=self._now(),
                )
            except ConflictError:
                existing = self.db.get_reimbursement(reimbursement_id)
                if existing is None:
                    raise
            else:
                logger.info("Recorded reimbursement %s of %s", created.id, created.amount)
                return created

        if existing.amount != amount:
            raise ConflictError(record_mismatch("Reimbursement", reimbursement_id))
        return existing

    def _already_applied(self, reimbursement: Reimbursement) -> ReimbursementResult:
        logger.info(
            "Reimbursement %s was already allocated; not applying again", reimbursement.id
        )
        return ReimbursementResult(reimbursement=reimbursement, entries=[], already_applied=True)

    def _notify(
        self, reimbursement: Reimbursement, entries: list[AllocationEntry], unallocated: Decimal
    ) -> ReimbursementResult:
        intents = build_notification_intents(reimbursement, entries)
        deliveries: list[DeliveryResult] = []
        if self.notifier is not None:
            deliveries = dispatch_notifications(self.notifier, intents)
        return ReimbursementResult(
            reimbursement=reimbursement,
            entries=entries,
            unallocated=unallocated,
            notifications=intents,
            deliveries=deliveries,
        )
