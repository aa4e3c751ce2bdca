"""Ownership-scoped contact listing, search and single fetch."""

from mycontacts.application.ports import ContactStore
from mycontacts.domain import (
    Contact,
    NotFoundError,
    SortOrder,
    Specification,
    User,
    sort_contacts,
)


def can_see(requester: User, contact: Contact) -> bool:
    """Owner or admin."""
    return requester.is_admin or contact.owner_id == requester.id


class ContactQueryService:
    """Read side of the address book. Listing never counts as an access; fetch_one does."""

    def __init__(self, store: ContactStore) -> None:
        self._store = store

    def list_visible(self, requester: User, include_inactive: bool = False) -> list[Contact]:
        """Admins see every owner's contacts; everyone else only their own. Active only by default."""
        if requester.is_admin:
            return self._store.find_all(include_inactive)
        return self._store.find_by_owner(requester.id, include_inactive)

    def search(
        self,
        requester: User,
        spec: Specification | None = None,
        *,
        include_inactive: bool = False,
        sort: SortOrder | str | None = None,
    ) -> list[Contact]:
        """Visible contacts matching spec (None matches all), then sorted (stable)."""
        visible = self.list_visible(requester, include_inactive)
        if spec is not None:
            visible = [c for c in visible if spec.is_satisfied_by(c)]
        return sort_contacts(visible, sort)

    def fetch_one(self, requester: User, contact_id: str) -> Contact:
        """Return one contact and count the access.

        Unknown ids and contacts the requester may not see both raise NotFoundError.
        """
        with self._store.locked():
            contact = self._store.find_by_id(contact_id)
            if contact is None or not can_see(requester, contact):
                raise NotFoundError(f"Contact {contact_id} not found.")
            contact.record_access()
            self._store.save(contact)
        return contact
