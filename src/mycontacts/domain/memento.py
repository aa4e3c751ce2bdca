"""Snapshots of a contact's mutable state, used to undo and redo edits."""

from dataclasses import dataclass

from mycontacts.domain.entities import (
    Contact,
    ContactDetails,
    EmailAddress,
    PhoneNumber,
)
from mycontacts.domain.errors import CommandStateError
from mycontacts.domain.tags import Tag


@dataclass(frozen=True)
class ContactMemento:
    """
    Value copy of everything a command may change on a contact.
    Owns immutable containers, so later edits to the live contact never reach it.
    Tags are shared instances; they are immutable too.
    """

    contact_id: str
    details: ContactDetails
    active: bool
    tags: frozenset[Tag]
    phone_numbers: tuple[PhoneNumber, ...]
    email_addresses: tuple[EmailAddress, ...]


def capture(contact: Contact) -> ContactMemento:
    return ContactMemento(
        contact_id=contact.id,
        details=contact.details,
        active=contact.active,
        tags=frozenset(contact.tags),
        phone_numbers=tuple(contact.phone_numbers),
        email_addresses=tuple(contact.email_addresses),
    )


def restore(contact: Contact, memento: ContactMemento) -> None:
    """Overwrite the contact's mutable fields. id, owner, creation time and access count are kept.

    Restoring a memento taken from another contact is a programming error.
    """
    if memento.contact_id != contact.id:
        raise CommandStateError(
            f"Memento of contact {memento.contact_id} cannot restore contact {contact.id}."
        )
    contact.details = memento.details
    contact.active = memento.active
    contact.tags = set(memento.tags)
    contact.phone_numbers = list(memento.phone_numbers)
    contact.email_addresses = list(memento.email_addresses)
