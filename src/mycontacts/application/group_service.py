"""Contact groups: create, membership, and cascading tag/delete."""

import logging
from collections.abc import Iterable

from mycontacts.application.commands import (
    AddTag,
    CommandBatch,
    CommandInvoker,
    ContactAction,
    ContactCommand,
    RemoveTag,
    SoftDelete,
)
from mycontacts.application.events import ContactEvents
from mycontacts.application.ports import ContactStore, GroupStore
from mycontacts.application.query_service import can_see
from mycontacts.domain import (
    AccessDeniedError,
    Contact,
    ContactComponent,
    ContactGroup,
    DuplicateMembershipError,
    NotFoundError,
    TagRegistry,
    User,
    ValidationError,
)
from mycontacts.domain.tags import normalize_tag_name
from mycontacts.domain.validation import require_text

logger = logging.getLogger(__name__)


class ContactGroupService:
    """Groups are owned by one user; only the owner or an admin may touch them."""

    def __init__(
        self,
        groups: GroupStore,
        contacts: ContactStore,
        registry: TagRegistry,
        events: ContactEvents | None = None,
    ) -> None:
        self._groups = groups
        self._contacts = contacts
        self._registry = registry
        self._events = events or ContactEvents()

    def create_group(
        self,
        owner: User,
        name: str,
        members: Iterable[ContactComponent] = (),
    ) -> ContactGroup:
        group = ContactGroup(owner_id=owner.id, name=require_text(name, "Group name"))
        for member in members:
            self._check_can_add(group, member)
            group.add(member)
        self._groups.save(group)
        logger.info("Created group %s (%s) for owner %s", group.id, group.name, owner.id)
        return group

    def groups_for(self, requester: User) -> list[ContactGroup]:
        if requester.is_admin:
            return self._groups.find_all()
        return self._groups.find_by_owner(requester.id)

    def get_group(self, requester: User, group_id: str) -> ContactGroup:
        group = self._groups.find_by_id(group_id)
        if group is None:
            raise NotFoundError(f"Group {group_id} not found.")
        if not requester.is_admin and group.owner_id != requester.id:
            raise AccessDeniedError("You do not have permission to access this group.")
        return group

    def group_details(self, requester: User, group_id: str) -> str:
        return self.get_group(requester, group_id).details_text()

    def rename_group(self, requester: User, group_id: str, name: str) -> ContactGroup:
        group = self.get_group(requester, group_id)
        group.name = require_text(name, "Group name")
        self._groups.save(group)
        return group

    def _check_can_add(self, group: ContactGroup, component: ContactComponent) -> None:
        if group.has_member_id(component.id):
            raise DuplicateMembershipError(f"{component.id} is already in group {group.name}.")
        if isinstance(component, ContactGroup) and component.contains(group):
            raise ValidationError("A group cannot contain itself.")

    def add_member(
        self, requester: User, group_id: str, component: ContactComponent
    ) -> ContactGroup:
        group = self.get_group(requester, group_id)
        self._check_can_add(group, component)
        group.add(component)
        self._groups.save(group)
        return group

    def add_contact(self, requester: User, group_id: str, contact_id: str) -> ContactGroup:
        """Add a stored contact by id. The contact must be visible to the requester."""
        contact = self._contacts.find_by_id(contact_id)
        if contact is None or not can_see(requester, contact):
            raise NotFoundError(f"Contact {contact_id} not found.")
        return self.add_member(requester, group_id, contact)

    def remove_member(
        self, requester: User, group_id: str, component: ContactComponent
    ) -> ContactGroup:
        group = self.get_group(requester, group_id)
        group.remove(component)
        self._groups.save(group)
        return group

    def _live_contacts(self, group: ContactGroup) -> list[Contact]:
        """Leaf contacts of the group that are still in the store."""
        return [c for c in group.contacts() if self._contacts.find_by_id(c.id) is not None]

    def _run_cascade(
        self,
        contacts: list[Contact],
        action: ContactAction,
        invoker: CommandInvoker,
        name: str,
    ) -> None:
        """Apply action to every contact as one undoable step, then save them."""
        if not contacts:
            return
        batch = CommandBatch((ContactCommand(c, action) for c in contacts), name=name)
        invoker.execute_command(batch)
        for contact in contacts:
            self._contacts.save(contact)

    def tag_group(
        self, requester: User, group_id: str, tag_name: str, *, invoker: CommandInvoker
    ) -> ContactGroup:
        """Tag every contact in the group, nested groups included. Undone as one step."""
        group = self.get_group(requester, group_id)
        tag = self._registry.intern(tag_name)
        changed = [c for c in self._live_contacts(group) if tag not in c.tags]
        self._run_cascade(changed, AddTag(tag), invoker, f"Tag group {group.name}")
        for contact in changed:
            self._events.contact_tagged(contact, tag)
        return group

    def untag_group(
        self, requester: User, group_id: str, tag_name: str, *, invoker: CommandInvoker
    ) -> ContactGroup:
        group = self.get_group(requester, group_id)
        if not normalize_tag_name(tag_name):
            raise ValidationError("Tag name must be non-empty.")
        tag = self._registry.get(tag_name)
        if tag is None:
            return group
        changed = [c for c in self._live_contacts(group) if tag in c.tags]
        self._run_cascade(changed, RemoveTag(tag), invoker, f"Untag group {group.name}")
        for contact in changed:
            self._events.contact_untagged(contact, tag)
        return group

    def delete_group(self, requester: User, group_id: str, *, invoker: CommandInvoker) -> None:
        """Soft delete every member, then drop the group record.

        Undo brings the members back; the group record stays gone.
        """
        group = self.get_group(requester, group_id)
        changed = [c for c in self._live_contacts(group) if c.active]
        self._run_cascade(changed, SoftDelete(), invoker, f"Delete group {group.name}")
        for contact in changed:
            self._events.contact_deleted(contact)
        self._groups.delete(group)
        logger.info("Deleted group %s and soft-deleted its members", group.id)

    def delete_all_for_owner(self, owner_id: str) -> int:
        return self._groups.delete_all_for_owner(owner_id)
