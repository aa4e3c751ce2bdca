"""Reversible contact edits: actions, commands, and the undo/redo invoker.

A ContactCommand snapshots the contact before it runs and again after its
first successful run. Undo restores the first snapshot; redo restores the
second without running the action again.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from collections.abc import Callable, Iterable
from typing import Protocol

from mycontacts.domain import (
    CommandStateError,
    Contact,
    ContactMemento,
    OrganizationDetails,
    PersonDetails,
    Tag,
    ValidationError,
    capture,
    restore,
)
from mycontacts.domain.validation import (
    optional_text,
    parse_email_addresses,
    parse_phone_numbers,
    require_text,
    validate_person_details,
)

logger = logging.getLogger(__name__)


class ContactAction(Protocol):
    """One mutation of a contact. Raises ValidationError on bad input."""

    def apply(self, contact: Contact) -> None:
        ...


def _first_last(name: str) -> tuple[str, str]:
    """Split name into first name and the rest (first word vs remainder)."""
    parts = name.strip().split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


@dataclass(frozen=True)
class UpdateName:
    """Rename a contact. For a person the first word becomes the first name."""

    name: str

    def apply(self, contact: Contact) -> None:
        name = require_text(self.name, "Name")
        if isinstance(contact.details, PersonDetails):
            first, last = _first_last(name)
            contact.details = PersonDetails(first_name=first, last_name=last)
        else:
            contact.details = replace(contact.details, name=name)


@dataclass(frozen=True)
class UpdatePersonName:
    first_name: str | None
    last_name: str | None

    def apply(self, contact: Contact) -> None:
        if not isinstance(contact.details, PersonDetails):
            raise ValidationError("Only a person has first and last names.")
        contact.details = validate_person_details(self.first_name, self.last_name)


@dataclass(frozen=True)
class UpdateOrganizationDetails:
    """None leaves a field as is; an empty string clears department/website."""

    name: str | None = None
    department: str | None = None
    website: str | None = None

    def apply(self, contact: Contact) -> None:
        details = contact.details
        if not isinstance(details, OrganizationDetails):
            raise ValidationError("Only an organization has department and website.")
        if self.name is not None:
            details = replace(details, name=require_text(self.name, "Organization name"))
        if self.department is not None:
            details = replace(details, department=optional_text(self.department))
        if self.website is not None:
            details = replace(details, website=optional_text(self.website))
        contact.details = details


@dataclass(frozen=True)
class ReplacePhoneNumbers:
    entries: tuple[str, ...]
    default_region: str | None = None

    def apply(self, contact: Contact) -> None:
        contact.phone_numbers = parse_phone_numbers(self.entries, self.default_region)


@dataclass(frozen=True)
class ReplaceEmailAddresses:
    entries: tuple[str, ...]

    def apply(self, contact: Contact) -> None:
        contact.email_addresses = parse_email_addresses(self.entries)


@dataclass(frozen=True)
class AddTag:
    tag: Tag

    def apply(self, contact: Contact) -> None:
        contact.add_tag(self.tag)


@dataclass(frozen=True)
class RemoveTag:
    tag: Tag

    def apply(self, contact: Contact) -> None:
        contact.remove_tag(self.tag)


@dataclass(frozen=True)
class Reactivate:
    """Bring a soft-deleted contact back into listings."""

    def apply(self, contact: Contact) -> None:
        contact.active = True


@dataclass(frozen=True)
class SoftDelete:
    """Hide the contact from listings. Undo brings it back."""

    def apply(self, contact: Contact) -> None:
        contact.delete()


class CommandState(str, Enum):
    PENDING = "pending"
    EXECUTED = "executed"
    UNDONE = "undone"


class Command(Protocol):
    """What the invoker keeps in its history."""

    @property
    def name(self) -> str:
        ...

    @property
    def contacts(self) -> tuple[Contact, ...]:
        ...

    def execute(self) -> None:
        ...

    def undo(self) -> None:
        ...

    def prune(self, is_gone: Callable[[Contact], bool]) -> bool:
        """Forget parts touching contacts for which is_gone is true. False once nothing is left."""
        ...


class ContactCommand:
    """One undoable edit of one contact."""

    def __init__(self, contact: Contact, action: ContactAction) -> None:
        self.contact = contact
        self.action = action
        self._before: ContactMemento = capture(contact)
        self._after: ContactMemento | None = None
        self._state = CommandState.PENDING

    @property
    def state(self) -> CommandState:
        return self._state

    @property
    def name(self) -> str:
        return type(self.action).__name__

    @property
    def contacts(self) -> tuple[Contact, ...]:
        return (self.contact,)

    def execute(self) -> None:
        """Run the action (first time) or restore the post-edit snapshot (redo)."""
        if self._state is CommandState.EXECUTED:
            raise CommandStateError(f"{self.name} on {self.contact.id} already executed.")
        if self._after is not None:
            restore(self.contact, self._after)
            self._state = CommandState.EXECUTED
            return
        try:
            self.action.apply(self.contact)
        except Exception:
            restore(self.contact, self._before)
            raise
        self._after = capture(self.contact)
        self._state = CommandState.EXECUTED

    def undo(self) -> None:
        restore(self.contact, self._before)
        if self._after is not None:
            self._state = CommandState.UNDONE

    def prune(self, is_gone: Callable[[Contact], bool]) -> bool:
        return not is_gone(self.contact)


class CommandBatch:
    """Several contact commands that execute, undo and redo as one step.

    Used for group cascades. If one part fails on the first run, the parts
    already applied are undone and the error propagates.
    """

    def __init__(self, commands: Iterable[ContactCommand], name: str = "Batch") -> None:
        self._commands = list(commands)
        self._name = name
        self._state = CommandState.PENDING

    @property
    def state(self) -> CommandState:
        return self._state

    @property
    def name(self) -> str:
        return self._name

    @property
    def contacts(self) -> tuple[Contact, ...]:
        return tuple(command.contact for command in self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def execute(self) -> None:
        if self._state is CommandState.EXECUTED:
            raise CommandStateError(f"{self.name} already executed.")
        done: list[ContactCommand] = []
        try:
            for command in self._commands:
                command.execute()
                done.append(command)
        except Exception:
            for command in reversed(done):
                command.undo()
            raise
        self._state = CommandState.EXECUTED

    def undo(self) -> None:
        for command in reversed(self._commands):
            command.undo()
        if self._state is CommandState.EXECUTED:
            self._state = CommandState.UNDONE

    def prune(self, is_gone: Callable[[Contact], bool]) -> bool:
        self._commands = [c for c in self._commands if c.prune(is_gone)]
        return bool(self._commands)


def _describe(command: Command) -> str:
    contacts = command.contacts
    if len(contacts) == 1:
        return f"{command.name} on contact {contacts[0].id}"
    return f"{command.name} on {len(contacts)} contacts"


class CommandInvoker:
    """Undo/redo history for one editing session. Not shared across sessions."""

    def __init__(self) -> None:
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_history(self) -> list[Command]:
        """Executed commands, oldest first."""
        return list(self._undo_stack)

    @property
    def redo_history(self) -> list[Command]:
        return list(self._redo_stack)

    def execute_command(self, command: Command) -> None:
        """Execute and record. On failure nothing is recorded and the error propagates."""
        command.execute()
        self._undo_stack.append(command)
        self._redo_stack.clear()
        logger.debug("Executed %s", _describe(command))

    def undo(self) -> Command | None:
        """Undo the latest command. Returns it, or None when there is nothing to undo."""
        if not self._undo_stack:
            logger.info("Nothing to undo.")
            return None
        command = self._undo_stack.pop()
        command.undo()
        self._redo_stack.append(command)
        logger.debug("Undid %s", _describe(command))
        return command

    def redo(self) -> Command | None:
        """Redo the latest undone command. Returns it, or None when there is nothing to redo.

        If re-executing fails the command is dropped from history.
        """
        if not self._redo_stack:
            logger.info("Nothing to redo.")
            return None
        command = self._redo_stack.pop()
        command.execute()
        self._undo_stack.append(command)
        logger.debug("Redid %s", _describe(command))
        return command

    def prune(self, is_gone: Callable[[Contact], bool]) -> int:
        """Drop history for contacts that no longer exist. Returns how many entries were dropped."""
        size = len(self._undo_stack) + len(self._redo_stack)
        self._undo_stack = [c for c in self._undo_stack if c.prune(is_gone)]
        self._redo_stack = [c for c in self._redo_stack if c.prune(is_gone)]
        return size - len(self._undo_stack) - len(self._redo_stack)

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
