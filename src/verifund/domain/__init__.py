"""Domain layer for verifund.

Services are imported from their modules (e.g.
``verifund.domain.reimbursement``); this package only re-exports the
dependency-free entities and errors so the storage layer can import them
without a cycle.
"""

from verifund.domain.entities import (
    AllocationEntry,
    Donation,
    Donor,
    PoolBalance,
    Reimbursement,
)
from verifund.domain.errors import (
    AllocationShortfallError,
    ConcurrentModificationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StorageUnavailableError,
    UnregisteredWalletError,
    ValidationError,
)

__all__ = [
    "AllocationEntry",
    "Donation",
    "Donor",
    "PoolBalance",
    "Reimbursement",
    "AllocationShortfallError",
    "ConcurrentModificationError",
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "StorageUnavailableError",
    "UnregisteredWalletError",
    "ValidationError",
]
