"""Tag values and the registry that interns them."""

import threading
from dataclasses import dataclass

from mycontacts.domain.errors import ValidationError


def normalize_tag_name(name: str | None) -> str:
    """Return the canonical form of a tag name (surrounding whitespace removed)."""
    return (name or "").strip()


@dataclass(frozen=True)
class Tag:
    """
    An immutable label attached to contacts.
    Obtain instances from a TagRegistry so equal names share one object.
    """

    name: str

    def __str__(self) -> str:
        return self.name


class TagRegistry:
    """Interns tag names. One registry per process, passed to whatever tags contacts.

    The pool only grows; tags are never evicted.
    """

    def __init__(self) -> None:
        self._pool: dict[str, Tag] = {}
        self._lock = threading.Lock()

    def intern(self, name: str | None) -> Tag:
        """Return the shared Tag for name, creating it on first use."""
        key = normalize_tag_name(name)
        if not key:
            raise ValidationError("Tag name must be non-empty.")
        with self._lock:
            tag = self._pool.get(key)
            if tag is None:
                tag = Tag(key)
                self._pool[key] = tag
            return tag

    def get(self, name: str | None) -> Tag | None:
        """Return the existing Tag for name, or None. Never creates."""
        with self._lock:
            return self._pool.get(normalize_tag_name(name))

    def all_tags(self) -> list[Tag]:
        with self._lock:
            return sorted(self._pool.values(), key=lambda t: t.name.lower())

    def __len__(self) -> int:
        with self._lock:
            return len(self._pool)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None
