"""Infrastructure layer: concrete implementations of application ports."""

from mycontacts.infrastructure.audit import ContactAuditLogger
from mycontacts.infrastructure.memory_repository import (
    InMemoryContactStore,
    InMemoryGroupStore,
    InMemoryUserStore,
)
from mycontacts.infrastructure.passwords import PasslibPasswordHasher

__all__ = [
    "ContactAuditLogger",
    "InMemoryContactStore",
    "InMemoryGroupStore",
    "InMemoryUserStore",
    "PasslibPasswordHasher",
]
