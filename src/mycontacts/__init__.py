"""
mycontacts core: clean-architecture layout.

- domain: entities (Contact, User, ContactGroup), tags, mementos, predicates. No outer dependencies.
- application: use cases (ContactService, ContactGroupService, ContactQueryService, UserService),
  undoable commands, ports, DTOs.
- infrastructure: adapters (in-memory stores, password hasher, audit observer).
"""

from mycontacts.application import (
    CommandInvoker,
    ContactCommand,
    ContactGroupService,
    ContactQueryService,
    ContactService,
    OrganizationDraft,
    PersonDraft,
    UserService,
)
from mycontacts.bootstrap import App, create_app
from mycontacts.domain import (
    Contact,
    ContactGroup,
    SortOrder,
    Specification,
    Tag,
    TagRegistry,
    User,
    UserRole,
)

__all__ = [
    "App",
    "CommandInvoker",
    "Contact",
    "ContactCommand",
    "ContactGroup",
    "ContactGroupService",
    "ContactQueryService",
    "ContactService",
    "OrganizationDraft",
    "PersonDraft",
    "SortOrder",
    "Specification",
    "Tag",
    "TagRegistry",
    "User",
    "UserRole",
    "UserService",
    "create_app",
]
