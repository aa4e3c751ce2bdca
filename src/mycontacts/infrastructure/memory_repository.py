"""In-memory implementations of ContactStore, GroupStore and UserStore (no DB)."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from mycontacts.domain import Contact, ContactGroup, User


class InMemoryContactStore:
    """Stores contacts in memory. Order preserved by insertion.
    Holds the live Contact objects, so edits made through commands are visible immediately.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, Contact] = {}
        self._order: list[str] = []
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def save(self, contact: Contact) -> None:
        with self._lock:
            if contact.id not in self._by_id:
                self._order.append(contact.id)
            self._by_id[contact.id] = contact

    def find_by_id(self, contact_id: str) -> Contact | None:
        with self._lock:
            return self._by_id.get(contact_id)

    def find_all(self, include_inactive: bool = False) -> list[Contact]:
        with self._lock:
            return [
                self._by_id[cid]
                for cid in self._order
                if include_inactive or self._by_id[cid].active
            ]

    def find_by_owner(self, owner_id: str, include_inactive: bool = False) -> list[Contact]:
        return [c for c in self.find_all(include_inactive) if c.owner_id == owner_id]

    def hard_delete(self, contact: Contact) -> None:
        with self._lock:
            if self._by_id.pop(contact.id, None) is not None:
                self._order.remove(contact.id)

    def delete_all_for_owner(self, owner_id: str) -> int:
        with self._lock:
            doomed = [cid for cid in self._order if self._by_id[cid].owner_id == owner_id]
            for cid in doomed:
                del self._by_id[cid]
            self._order = [cid for cid in self._order if cid in self._by_id]
            return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)


class InMemoryGroupStore:
    """Stores groups in memory. Order preserved by insertion."""

    def __init__(self) -> None:
        self._by_id: dict[str, ContactGroup] = {}
        self._lock = threading.RLock()

    def save(self, group: ContactGroup) -> None:
        with self._lock:
            self._by_id[group.id] = group

    def find_by_id(self, group_id: str) -> ContactGroup | None:
        with self._lock:
            return self._by_id.get(group_id)

    def find_by_owner(self, owner_id: str) -> list[ContactGroup]:
        return [g for g in self.find_all() if g.owner_id == owner_id]

    def find_all(self) -> list[ContactGroup]:
        with self._lock:
            return list(self._by_id.values())

    def delete(self, group: ContactGroup) -> None:
        with self._lock:
            self._by_id.pop(group.id, None)

    def delete_all_for_owner(self, owner_id: str) -> int:
        with self._lock:
            doomed = [gid for gid, g in self._by_id.items() if g.owner_id == owner_id]
            for gid in doomed:
                del self._by_id[gid]
            return len(doomed)


class InMemoryUserStore:
    """Stores users in memory, indexed by id and lower-cased email."""

    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}
        self._id_by_email: dict[str, str] = {}
        self._lock = threading.RLock()

    def save(self, user: User) -> None:
        with self._lock:
            self._by_id[user.id] = user
            self._id_by_email[user.email.lower()] = user.id

    def find_by_id(self, user_id: str) -> User | None:
        with self._lock:
            return self._by_id.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            user_id = self._id_by_email.get((email or "").strip().lower())
            return self._by_id.get(user_id) if user_id else None

    def find_all(self) -> list[User]:
        with self._lock:
            return list(self._by_id.values())

    def delete(self, user: User) -> None:
        with self._lock:
            self._by_id.pop(user.id, None)
            self._id_by_email.pop(user.email.lower(), None)
