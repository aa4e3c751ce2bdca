"""Composable search predicates over contacts.

A Specification captures search terms only, never contact data, so one built
before an edit still evaluates against the contact's current state.
Blank search terms match every contact.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from mycontacts.domain.entities import Contact, ContactKind


@dataclass(frozen=True)
class Specification:
    """A side-effect-free predicate. Combinators return new specifications."""

    predicate: Callable[[Contact], bool]
    description: str = "custom"

    def is_satisfied_by(self, contact: Contact) -> bool:
        return bool(self.predicate(contact))

    __call__ = is_satisfied_by

    def and_(self, other: "Specification") -> "Specification":
        return Specification(
            lambda c: self.is_satisfied_by(c) and other.is_satisfied_by(c),
            f"({self.description} AND {other.description})",
        )

    def or_(self, other: "Specification") -> "Specification":
        return Specification(
            lambda c: self.is_satisfied_by(c) or other.is_satisfied_by(c),
            f"({self.description} OR {other.description})",
        )

    def not_(self) -> "Specification":
        return Specification(
            lambda c: not self.is_satisfied_by(c),
            f"NOT {self.description}",
        )

    __and__ = and_
    __or__ = or_
    __invert__ = not_

    def __str__(self) -> str:
        return self.description


MATCH_ALL = Specification(lambda c: True, "all")
MATCH_NONE = Specification(lambda c: False, "none")


def _needle(term: str | None) -> str | None:
    """Lower-cased search term, or None when blank (blank means match all)."""
    if term is None or not term.strip():
        return None
    return term.strip().lower()


def name_contains(term: str | None) -> Specification:
    needle = _needle(term)
    if needle is None:
        return MATCH_ALL
    return Specification(
        lambda c: needle in c.display_name.lower(), f"name contains {term.strip()!r}"
    )


def phone_contains(term: str | None) -> Specification:
    needle = _needle(term)
    if needle is None:
        return MATCH_ALL
    return Specification(
        lambda c: any(needle in p.number.lower() for p in c.phone_numbers),
        f"phone contains {term.strip()!r}",
    )


def email_contains(term: str | None) -> Specification:
    needle = _needle(term)
    if needle is None:
        return MATCH_ALL
    return Specification(
        lambda c: any(needle in e.address.lower() for e in c.email_addresses),
        f"email contains {term.strip()!r}",
    )


def tag_contains(term: str | None) -> Specification:
    needle = _needle(term)
    if needle is None:
        return MATCH_ALL
    return Specification(
        lambda c: any(needle in name.lower() for name in c.tag_names),
        f"tag contains {term.strip()!r}",
    )


def has_tag(name: str | None) -> Specification:
    """Exact (case-insensitive) tag match."""
    needle = _needle(name)
    if needle is None:
        return MATCH_ALL
    return Specification(
        lambda c: any(needle == t.lower() for t in c.tag_names), f"tag is {name.strip()!r}"
    )


def accessed_at_least(count: int) -> Specification:
    return Specification(lambda c: c.access_count >= count, f"accessed >= {count}")


def added_since(since: datetime | None) -> Specification:
    """Contacts created at or after since. None matches all."""
    if since is None:
        return MATCH_ALL
    return Specification(lambda c: c.created_at >= since, f"added since {since.isoformat()}")


def is_active() -> Specification:
    return Specification(lambda c: c.active, "active")


def kind_is(kind: ContactKind) -> Specification:
    return Specification(lambda c: c.kind is kind, f"kind is {kind.value}")


def all_of(*specs: Specification) -> Specification:
    result = MATCH_ALL
    for spec in specs:
        result = result & spec
    return result


def any_of(*specs: Specification) -> Specification:
    if not specs:
        return MATCH_NONE
    result = specs[0]
    for spec in specs[1:]:
        result = result | spec
    return result
