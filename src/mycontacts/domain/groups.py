"""Contact groups: a composite of contacts and nested groups."""

import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol

from mycontacts.domain.entities import Contact
from mycontacts.domain.tags import Tag

_SEPARATOR = "------------------------"


class ContactComponent(Protocol):
    """Anything a group can hold: a Contact or another ContactGroup."""

    id: str

    def add_tag(self, tag: Tag) -> None: ...

    def remove_tag(self, tag: Tag) -> None: ...

    def delete(self) -> None: ...

    def all_tags(self) -> set[Tag]: ...

    @property
    def tag_names(self) -> set[str]: ...

    def contacts(self) -> Iterator[Contact]: ...

    def details_text(self) -> str: ...


@dataclass(eq=False)
class ContactGroup:
    """
    Named collection of components owned by one user.
    Bulk operations apply to every member, recursing into nested groups.
    Aggregate tags are computed on each call, never stored.
    """

    owner_id: str
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    _members: list[ContactComponent] = field(default_factory=list, repr=False)

    @property
    def members(self) -> list[ContactComponent]:
        return list(self._members)

    def add(self, component: ContactComponent) -> None:
        self._members.append(component)

    def remove(self, component: ContactComponent) -> None:
        """Remove by identity. Removing a non-member does nothing."""
        for i, member in enumerate(self._members):
            if member is component:
                del self._members[i]
                return

    def clear(self) -> None:
        self._members.clear()

    def has_member_id(self, component_id: str) -> bool:
        return any(m.id == component_id for m in self._members)

    def contains(self, component: ContactComponent) -> bool:
        """True if component is this group or appears anywhere below it."""
        if component is self:
            return True
        for member in self._members:
            if member is component:
                return True
            if isinstance(member, ContactGroup) and member.contains(component):
                return True
        return False

    def add_tag(self, tag: Tag) -> None:
        for member in self._members:
            member.add_tag(tag)

    def remove_tag(self, tag: Tag) -> None:
        for member in self._members:
            member.remove_tag(tag)

    def delete(self) -> None:
        """Soft delete every member. Removing the group record is the caller's job."""
        for member in self._members:
            member.delete()

    def all_tags(self) -> set[Tag]:
        tags: set[Tag] = set()
        for member in self._members:
            tags |= member.all_tags()
        return tags

    @property
    def tag_names(self) -> set[str]:
        return {tag.name for tag in self.all_tags()}

    def contacts(self) -> Iterator[Contact]:
        """Every leaf contact below this group, each once, in member order."""
        seen: set[str] = set()
        for member in self._members:
            for contact in member.contacts():
                if contact.id not in seen:
                    seen.add(contact.id)
                    yield contact

    def details_text(self) -> str:
        blocks = [member.details_text() for member in self._members]
        header = f"Group: {self.name}\n{_SEPARATOR}"
        if not blocks:
            return header
        return header + "\n" + f"\n{_SEPARATOR}\n".join(blocks)
