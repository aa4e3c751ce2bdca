"""Domain layer: entities, value objects, predicates. No dependencies on outer layers."""

from mycontacts.domain.entities import (
    Contact,
    ContactKind,
    EmailAddress,
    OrganizationDetails,
    PersonDetails,
    PhoneNumber,
    ProfilePreferences,
    User,
    UserRole,
    new_organization,
    new_person,
)
from mycontacts.domain.errors import (
    AccessDeniedError,
    AuthenticationError,
    CommandStateError,
    ContactsError,
    DuplicateMembershipError,
    NotFoundError,
    ValidationError,
)
from mycontacts.domain.groups import ContactComponent, ContactGroup
from mycontacts.domain.memento import ContactMemento, capture, restore
from mycontacts.domain.sorting import SortOrder, sort_contacts
from mycontacts.domain.specifications import Specification
from mycontacts.domain.tags import Tag, TagRegistry

__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "CommandStateError",
    "Contact",
    "ContactComponent",
    "ContactGroup",
    "ContactKind",
    "ContactMemento",
    "ContactsError",
    "DuplicateMembershipError",
    "EmailAddress",
    "NotFoundError",
    "OrganizationDetails",
    "PersonDetails",
    "PhoneNumber",
    "ProfilePreferences",
    "SortOrder",
    "Specification",
    "Tag",
    "TagRegistry",
    "User",
    "UserRole",
    "ValidationError",
    "capture",
    "new_organization",
    "new_person",
    "restore",
    "sort_contacts",
]
