"""Application ports (interfaces). Implemented by infrastructure adapters."""

from contextlib import AbstractContextManager
from typing import Protocol

from mycontacts.domain import Contact, ContactGroup, Tag, User


class ContactStore(Protocol):
    """Persists contacts keyed by id. Listings keep insertion order."""

    def save(self, contact: Contact) -> None:
        """Insert or replace the contact."""
        ...

    def find_by_id(self, contact_id: str) -> Contact | None:
        """Return the contact with the given id (active or not), or None."""
        ...

    def find_all(self, include_inactive: bool = False) -> list[Contact]:
        ...

    def find_by_owner(self, owner_id: str, include_inactive: bool = False) -> list[Contact]:
        ...

    def hard_delete(self, contact: Contact) -> None:
        """Remove the contact from the store."""
        ...

    def delete_all_for_owner(self, owner_id: str) -> int:
        """Remove every contact of owner_id. Returns how many were removed."""
        ...

    def locked(self) -> AbstractContextManager:
        """Hold the store lock across a read-modify-write."""
        ...


class GroupStore(Protocol):
    """Persists contact groups keyed by id."""

    def save(self, group: ContactGroup) -> None:
        ...

    def find_by_id(self, group_id: str) -> ContactGroup | None:
        ...

    def find_by_owner(self, owner_id: str) -> list[ContactGroup]:
        ...

    def find_all(self) -> list[ContactGroup]:
        ...

    def delete(self, group: ContactGroup) -> None:
        ...

    def delete_all_for_owner(self, owner_id: str) -> int:
        ...


class UserStore(Protocol):
    """Persists registered users. Emails are unique (lower-cased)."""

    def save(self, user: User) -> None:
        ...

    def find_by_id(self, user_id: str) -> User | None:
        ...

    def find_by_email(self, email: str) -> User | None:
        ...

    def find_all(self) -> list[User]:
        ...

    def delete(self, user: User) -> None:
        ...


class ContactObserver(Protocol):
    """Side-channel notifications. Failures are logged, never propagated."""

    def on_contact_deleted(self, contact: Contact) -> None:
        ...

    def on_contact_tagged(self, contact: Contact, tag: Tag) -> None:
        ...

    def on_contact_untagged(self, contact: Contact, tag: Tag) -> None:
        ...


class PasswordHasher(Protocol):
    def hash(self, plain: str) -> str:
        ...

    def verify(self, plain: str, hashed: str) -> bool:
        ...
