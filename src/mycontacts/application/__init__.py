"""Application layer: use cases, ports, commands, and DTOs. Depends only on domain."""

from mycontacts.application.commands import (
    AddTag,
    Command,
    CommandBatch,
    CommandInvoker,
    CommandState,
    ContactAction,
    ContactCommand,
    Reactivate,
    RemoveTag,
    ReplaceEmailAddresses,
    ReplacePhoneNumbers,
    SoftDelete,
    UpdateName,
    UpdateOrganizationDetails,
    UpdatePersonName,
)
from mycontacts.application.contact_service import ContactService
from mycontacts.application.dto import OrganizationDraft, PersonDraft
from mycontacts.application.events import ContactEvents
from mycontacts.application.group_service import ContactGroupService
from mycontacts.application.ports import (
    ContactObserver,
    ContactStore,
    GroupStore,
    PasswordHasher,
    UserStore,
)
from mycontacts.application.query_service import ContactQueryService
from mycontacts.application.user_service import Session, SessionStore, UserService

__all__ = [
    "AddTag",
    "Command",
    "CommandBatch",
    "CommandInvoker",
    "CommandState",
    "ContactAction",
    "ContactCommand",
    "ContactEvents",
    "ContactGroupService",
    "ContactObserver",
    "ContactQueryService",
    "ContactService",
    "ContactStore",
    "GroupStore",
    "OrganizationDraft",
    "PasswordHasher",
    "PersonDraft",
    "Reactivate",
    "RemoveTag",
    "ReplaceEmailAddresses",
    "ReplacePhoneNumbers",
    "Session",
    "SessionStore",
    "SoftDelete",
    "UpdateName",
    "UpdateOrganizationDetails",
    "UpdatePersonName",
    "UserService",
    "UserStore",
]
