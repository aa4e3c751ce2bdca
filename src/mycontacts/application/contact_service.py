"""Contact creation, editing (undoable), tagging and deletion."""

import logging

from mycontacts.application.commands import (
    AddTag,
    CommandInvoker,
    ContactAction,
    ContactCommand,
    Reactivate,
    RemoveTag,
    ReplaceEmailAddresses,
    ReplacePhoneNumbers,
    SoftDelete,
    UpdateName,
)
from mycontacts.application.dto import (
    OrganizationDraft,
    PersonDraft,
    validate_organization_draft,
    validate_person_draft,
)
from mycontacts.application.events import ContactEvents
from mycontacts.application.ports import ContactObserver, ContactStore
from mycontacts.application.query_service import can_see
from mycontacts.domain import (
    AccessDeniedError,
    Contact,
    NotFoundError,
    TagRegistry,
    User,
    ValidationError,
    new_organization,
    new_person,
)
from mycontacts.domain.tags import normalize_tag_name

logger = logging.getLogger(__name__)


class ContactService:
    """Write side of the address book.

    Every field edit runs as a ContactCommand through the caller's CommandInvoker,
    so it can be undone and redone within that session.
    """

    def __init__(
        self,
        store: ContactStore,
        registry: TagRegistry,
        events: ContactEvents | None = None,
        *,
        default_region: str | None = None,
    ) -> None:
        self._store = store
        self._registry = registry
        self._events = events or ContactEvents()
        self._default_region = default_region

    @property
    def events(self) -> ContactEvents:
        return self._events

    def add_observer(self, observer: ContactObserver) -> None:
        self._events.add_observer(observer)

    def create_person(self, owner: User, draft: PersonDraft) -> Contact:
        valid = validate_person_draft(draft, self._default_region)
        contact = new_person(owner.id, valid.details, valid.phone_numbers, valid.email_addresses)
        self._store.save(contact)
        logger.info("Created person %s for owner %s", contact.id, owner.id)
        return contact

    def create_organization(self, owner: User, draft: OrganizationDraft) -> Contact:
        valid = validate_organization_draft(draft, self._default_region)
        contact = new_organization(
            owner.id, valid.details, valid.phone_numbers, valid.email_addresses
        )
        self._store.save(contact)
        logger.info("Created organization %s for owner %s", contact.id, owner.id)
        return contact

    def _resolve_owned(self, requester: User, contact_id: str) -> Contact:
        contact = self._store.find_by_id(contact_id)
        if contact is None:
            raise NotFoundError(f"Contact {contact_id} not found.")
        if not can_see(requester, contact):
            raise AccessDeniedError("You cannot modify this contact.")
        return contact

    def _run(self, contact: Contact, action: ContactAction, invoker: CommandInvoker) -> Contact:
        invoker.execute_command(ContactCommand(contact, action))
        self._store.save(contact)
        return contact

    def edit(
        self,
        requester: User,
        contact_id: str,
        action: ContactAction,
        *,
        invoker: CommandInvoker,
    ) -> Contact:
        """Apply action as an undoable command. On failure the contact is unchanged."""
        contact = self._resolve_owned(requester, contact_id)
        return self._run(contact, action, invoker)

    def rename(
        self, requester: User, contact_id: str, name: str, *, invoker: CommandInvoker
    ) -> Contact:
        return self.edit(requester, contact_id, UpdateName(name), invoker=invoker)

    def replace_phone_numbers(
        self,
        requester: User,
        contact_id: str,
        entries: list[str] | tuple[str, ...],
        *,
        invoker: CommandInvoker,
    ) -> Contact:
        action = ReplacePhoneNumbers(tuple(entries), self._default_region)
        return self.edit(requester, contact_id, action, invoker=invoker)

    def replace_email_addresses(
        self,
        requester: User,
        contact_id: str,
        entries: list[str] | tuple[str, ...],
        *,
        invoker: CommandInvoker,
    ) -> Contact:
        return self.edit(
            requester, contact_id, ReplaceEmailAddresses(tuple(entries)), invoker=invoker
        )

    def tag_contact(
        self, requester: User, contact_id: str, tag_name: str, *, invoker: CommandInvoker
    ) -> Contact:
        """Tag the contact. Tagging it twice records nothing and notifies nobody."""
        contact = self._resolve_owned(requester, contact_id)
        tag = self._registry.intern(tag_name)
        if tag in contact.tags:
            return contact
        self._run(contact, AddTag(tag), invoker)
        self._events.contact_tagged(contact, tag)
        return contact

    def untag_contact(
        self, requester: User, contact_id: str, tag_name: str, *, invoker: CommandInvoker
    ) -> Contact:
        if not normalize_tag_name(tag_name):
            raise ValidationError("Tag name must be non-empty.")
        contact = self._resolve_owned(requester, contact_id)
        tag = self._registry.get(tag_name)
        if tag is None or tag not in contact.tags:
            return contact
        self._run(contact, RemoveTag(tag), invoker)
        self._events.contact_untagged(contact, tag)
        return contact

    def _forget_removed(self, invoker: CommandInvoker) -> None:
        # Hard-deleted contacts must not come back through undo or redo.
        dropped = invoker.prune(lambda contact: self._store.find_by_id(contact.id) is None)
        if dropped:
            logger.info("Dropped %d history entries for removed contacts", dropped)

    def undo(self, invoker: CommandInvoker) -> list[Contact]:
        """Undo the session's latest edit. Returns the contacts it touched (empty if none)."""
        self._forget_removed(invoker)
        command = invoker.undo()
        if command is None:
            return []
        for contact in command.contacts:
            self._store.save(contact)
        return list(command.contacts)

    def redo(self, invoker: CommandInvoker) -> list[Contact]:
        self._forget_removed(invoker)
        command = invoker.redo()
        if command is None:
            return []
        for contact in command.contacts:
            self._store.save(contact)
        return list(command.contacts)

    def delete_contact(
        self, requester: User, contact_id: str, *, invoker: CommandInvoker
    ) -> Contact:
        """Soft delete as an undoable command. An already deleted contact counts as not found."""
        contact = self._resolve_owned(requester, contact_id)
        if not contact.active:
            raise NotFoundError(f"Contact {contact_id} not found.")
        self._run(contact, SoftDelete(), invoker)
        logger.info("Soft-deleted contact %s", contact.id)
        self._events.contact_deleted(contact)
        return contact

    def restore_contact(
        self, requester: User, contact_id: str, *, invoker: CommandInvoker
    ) -> Contact:
        return self.edit(requester, contact_id, Reactivate(), invoker=invoker)

    def hard_delete_contact(self, requester: User, contact_id: str) -> None:
        """Remove the contact for good. Undo history that refers to it is dropped on next use."""
        contact = self._resolve_owned(requester, contact_id)
        self._store.hard_delete(contact)
        logger.info("Permanently deleted contact %s", contact.id)
        self._events.contact_deleted(contact)

    def delete_all_for_owner(self, owner_id: str) -> int:
        removed = self._store.delete_all_for_owner(owner_id)
        logger.info("Removed %d contacts of owner %s", removed, owner_id)
        return removed

    def available_tags(self) -> list[str]:
        return [tag.name for tag in self._registry.all_tags()]
