"""Sort orders for contact listings. All sorts are stable: ties keep scan order."""

from collections.abc import Iterable
from enum import Enum

from mycontacts.domain.entities import Contact


class SortOrder(str, Enum):
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"
    MOST_ACCESSED = "most_accessed"
    LEAST_ACCESSED = "least_accessed"


_KEYS = {
    SortOrder.NAME_ASC: (lambda c: c.display_name.casefold(), False),
    SortOrder.NAME_DESC: (lambda c: c.display_name.casefold(), True),
    SortOrder.NEWEST_FIRST: (lambda c: c.created_at, True),
    SortOrder.OLDEST_FIRST: (lambda c: c.created_at, False),
    SortOrder.MOST_ACCESSED: (lambda c: c.access_count, True),
    SortOrder.LEAST_ACCESSED: (lambda c: c.access_count, False),
}


def sort_contacts(contacts: Iterable[Contact], order: SortOrder | str | None) -> list[Contact]:
    """Return a new sorted list; None keeps the input order."""
    if order is None:
        return list(contacts)
    key, reverse = _KEYS[SortOrder(order)]
    # sorted() keeps equal elements in input order even with reverse=True.
    return sorted(contacts, key=key, reverse=reverse)
