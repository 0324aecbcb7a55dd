"""Donor notification intents and the sink they are delivered to.

The ledger only decides who to tell and what; delivering the message
(email, templating, retries) belongs to the sink implementation handed to
``ReimbursementProcessor``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from verifund.domain.entities import AllocationEntry, Reimbursement
from verifund.logging_setup import get_logger
from verifund.utils.amount_parser import format_amount

logger = get_logger(__name__)


@dataclass(frozen=True)
class NotificationIntent:
    """Tell one donor how much of one donation a reimbursement used."""

    donor_email: str
    amount_spent: Decimal
    original_amount: Decimal
    percentage_spent: float
    reimbursement_amount: Decimal
    invoice_text: str
    tx_hash: str
    wallet_address: str


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of handing one intent to the sink."""

    email: str
    success: bool
    error: Optional[str] = None


class NotificationSink(ABC):
    """Destination for donor notification intents."""

    @abstractmethod
    def send(self, intent: NotificationIntent) -> None:
        """Deliver one intent. Raise on failure."""
        pass


class LoggingNotificationSink(NotificationSink):
    """Sink that writes each intent to the log instead of delivering it."""

    def send(self, intent: NotificationIntent) -> None:
        logger.info(
            "Notify %s: %s of %s ETH (%.1f%%) used for '%s' (tx %s)",
            intent.donor_email,
            format_amount(intent.amount_spent),
            format_amount(intent.original_amount),
            intent.percentage_spent,
            intent.invoice_text,
            intent.tx_hash,
        )


def build_notification_intents(
    reimbursement: Reimbursement, entries: Iterable[AllocationEntry]
) -> list[NotificationIntent]:
    """One intent per allocation entry, in allocation order."""
    return [
        NotificationIntent(
            donor_email=entry.email,
            amount_spent=entry.amount_spent,
            original_amount=entry.original_amount,
            percentage_spent=entry.percentage_spent,
            reimbursement_amount=reimbursement.amount,
            invoice_text=reimbursement.invoice_text,
            tx_hash=reimbursement.tx_hash,
            wallet_address=entry.wallet_address,
        )
        for entry in entries
    ]


def dispatch_notifications(
    sink: NotificationSink, intents: Sequence[NotificationIntent]
) -> list[DeliveryResult]:
    """Send every intent, recording failures without stopping.

    A failed delivery is logged and reported in the results; it never
    affects the ledger, which has already been updated.
    """
    results = []
    for intent in intents:
        try:
            sink.send(intent)
        except Exception as exc:
            logger.exception("Failed to notify %s", intent.donor_email)
            results.append(DeliveryResult(email=intent.donor_email, success=False, error=str(exc)))
        else:
            results.append(DeliveryResult(email=intent.donor_email, success=True))
    return results
