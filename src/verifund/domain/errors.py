"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``kind`` is the
    machine-readable category reported alongside the message.
    """

    kind = "domain_error"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    kind = "invalid_input"


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    kind = "not_found"


class UnregisteredWalletError(NotFoundError):
    """Donation references a wallet with no registered donor."""

    kind = "unregistered_wallet"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    kind = "conflict"


class ConcurrentModificationError(ConflictError):
    """Ledger rows changed between read and write."""

    kind = "concurrent_modification"


class StorageUnavailableError(DomainError):
    """The ledger store could not complete a read or write."""

    kind = "storage_unavailable"


class AllocationShortfallError(DomainError):
    """Reimbursement exceeds the unspent balance of all donations."""

    kind = "allocation_shortfall"

    def __init__(self, requested: Decimal, available: Decimal):
        self.requested = requested
        self.available = available
        super().__init__(allocation_shortfall(requested, available))


def donor_not_found(email: str) -> str:
    """Return message for missing donor by email."""
    return f"Donor '{email}' not found"


def wallet_not_registered(wallet_address: str) -> str:
    """Return message for a wallet without a donor."""
    return (
        f"Wallet {wallet_address} is not registered. "
        "Register the donor before recording donations."
    )


def wallet_taken(wallet_address: str, email: str) -> str:
    """Return message when a wallet already belongs to another donor."""
    return f"Wallet {wallet_address} is already registered to {email}"


def donation_not_found(donation_id: str) -> str:
    """Return message for missing donation."""
    return f"Donation {donation_id} not found"


def reimbursement_not_found(reimbursement_id: str) -> str:
    """Return message for missing reimbursement."""
    return f"Reimbursement {reimbursement_id} not found"


def record_mismatch(kind: str, record_id: str) -> str:
    """Return message when a re-ingested record disagrees with the stored one."""
    return f"{kind} {record_id} already exists with different details"


def allocation_shortfall(requested: Decimal, available: Decimal) -> str:
    """Return message for a reimbursement larger than the pool."""
    return (
        f"Reimbursement of {requested} exceeds unspent donations of {available}"
    )
