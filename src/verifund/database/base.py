"""Abstract ledger store interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain services
from verifund.domain.entities import (
    AllocationEntry,
    Donation,
    Donor,
    Reimbursement,
)


class Database(ABC):
    """Abstract ledger store for verifund.

    Holds three independent collections (donors, donations,
    reimbursements). Implementations raise ``StorageUnavailableError`` when
    the backend cannot complete an operation and ``ConflictError`` on
    unique-key violations.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Donor operations
    @abstractmethod
    def get_donor_by_email(self, email: str) -> Optional[Donor]:
        """Get donor by email (case-insensitive)."""
        pass

    @abstractmethod
    def get_donor_by_wallet(self, wallet_address: str) -> Optional[Donor]:
        """Get donor by wallet address (case-insensitive)."""
        pass

    @abstractmethod
    def save_donor(self, email: str, wallet_address: str) -> Donor:
        """Create a donor, or overwrite the wallet of an existing email.

        The original ``created_at`` is kept when the donor already exists.
        """
        pass

    # Donation operations
    @abstractmethod
    def create_donation(
        self,
        donation_id: str,
        email: str,
        wallet_address: str,
        amount: Decimal,
        tx_hash: str,
        ordinal: int,
        created_at: Optional[datetime] = None,
    ) -> Donation:
        """Create a donation with ``remaining`` equal to ``amount``."""
        pass

    @abstractmethod
    def get_donation(self, donation_id: str) -> Optional[Donation]:
        """Get donation by ID."""
        pass

    @abstractmethod
    def list_donations(self, email: Optional[str] = None) -> list[Donation]:
        """List donations newest first, optionally filtered by donor email."""
        pass

    # Reimbursement operations
    @abstractmethod
    def create_reimbursement(
        self,
        reimbursement_id: str,
        amount: Decimal,
        tx_hash: str,
        ordinal: int,
        invoice_text: str,
        created_at: Optional[datetime] = None,
    ) -> Reimbursement:
        """Create a reimbursement with no allocation applied."""
        pass

    @abstractmethod
    def get_reimbursement(self, reimbursement_id: str) -> Optional[Reimbursement]:
        """Get reimbursement by ID."""
        pass

    @abstractmethod
    def list_reimbursements(self) -> list[Reimbursement]:
        """List reimbursements newest first."""
        pass

    @abstractmethod
    def apply_allocation(
        self,
        reimbursement_id: str,
        entries: Sequence[AllocationEntry],
        applied_at: Optional[datetime] = None,
    ) -> Reimbursement:
        """Atomically apply an allocation and mark the reimbursement allocated.

        Every donation is decremented only if its stored ``remaining`` still
        equals the entry's ``remaining_before``, and the reimbursement is
        marked only if it was not already marked. If any of these checks
        fails nothing is written and ``ConcurrentModificationError`` is
        raised.

        Raises:
            NotFoundError: If the reimbursement does not exist
            ConcurrentModificationError: If a compare-and-swap check fails
        """
        pass
