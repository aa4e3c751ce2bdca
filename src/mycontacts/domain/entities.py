"""Domain entities: Contact (person or organization), User, and their value objects."""

import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from mycontacts.domain.formatting import render_details
from mycontacts.domain.tags import Tag


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class ContactKind(str, Enum):
    PERSON = "person"
    ORGANIZATION = "organization"


class UserRole(str, Enum):
    FREE = "free"
    PREMIUM = "premium"
    ADMIN = "admin"


@dataclass(frozen=True)
class PhoneNumber:
    label: str
    number: str

    def __str__(self) -> str:
        return f"{self.label}: {self.number}"


@dataclass(frozen=True)
class EmailAddress:
    label: str
    address: str

    def __str__(self) -> str:
        return f"{self.label}: {self.address}"


@dataclass(frozen=True)
class PersonDetails:
    """Variant payload of an individual."""

    first_name: str = ""
    last_name: str = ""


@dataclass(frozen=True)
class OrganizationDetails:
    """Variant payload of a company or institution."""

    name: str = ""
    department: str | None = None
    website: str | None = None


ContactDetails = PersonDetails | OrganizationDetails


@dataclass(eq=False)
class Contact:
    """
    An entry of a user's address book.
    id, owner_id and created_at never change after construction; everything else is
    mutable state captured by mementos. Edit through commands so changes stay undoable.
    """

    owner_id: str
    details: ContactDetails
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)
    active: bool = True
    access_count: int = 0
    tags: set[Tag] = field(default_factory=set)
    phone_numbers: list[PhoneNumber] = field(default_factory=list)
    email_addresses: list[EmailAddress] = field(default_factory=list)

    def __post_init__(self):
        if not self.owner_id:
            raise ValueError("Contact owner_id must be non-empty.")
        if not isinstance(self.details, (PersonDetails, OrganizationDetails)):
            raise TypeError(f"Unsupported contact details: {type(self.details).__name__}")

    def __setattr__(self, name, value):
        if name in ("id", "owner_id", "created_at") and name in self.__dict__:
            raise AttributeError(f"Contact.{name} is immutable.")
        super().__setattr__(name, value)

    @property
    def kind(self) -> ContactKind:
        if isinstance(self.details, PersonDetails):
            return ContactKind.PERSON
        return ContactKind.ORGANIZATION

    @property
    def display_name(self) -> str:
        details = self.details
        if isinstance(details, PersonDetails):
            return f"{details.first_name} {details.last_name}".strip()
        if details.department:
            return f"{details.name} ({details.department})"
        return details.name

    @property
    def tag_names(self) -> set[str]:
        return {tag.name for tag in self.tags}

    # Composite component interface (shared with ContactGroup).

    def add_tag(self, tag: Tag) -> None:
        self.tags.add(tag)

    def remove_tag(self, tag: Tag) -> None:
        self.tags.discard(tag)

    def delete(self) -> None:
        """Soft delete: the contact stays in the store but leaves default listings."""
        self.active = False

    def all_tags(self) -> set[Tag]:
        return set(self.tags)

    def contacts(self) -> Iterator["Contact"]:
        yield self

    def details_text(self) -> str:
        return render_details(self)

    def record_access(self) -> None:
        self.access_count += 1


def new_person(
    owner_id: str,
    details: PersonDetails,
    phone_numbers: list[PhoneNumber] | None = None,
    email_addresses: list[EmailAddress] | None = None,
) -> Contact:
    """Build a person contact from already validated fields."""
    return Contact(
        owner_id=owner_id,
        details=details,
        phone_numbers=list(phone_numbers or []),
        email_addresses=list(email_addresses or []),
    )


def new_organization(
    owner_id: str,
    details: OrganizationDetails,
    phone_numbers: list[PhoneNumber] | None = None,
    email_addresses: list[EmailAddress] | None = None,
) -> Contact:
    """Build an organization contact from already validated fields."""
    return Contact(
        owner_id=owner_id,
        details=details,
        phone_numbers=list(phone_numbers or []),
        email_addresses=list(email_addresses or []),
    )


@dataclass
class ProfilePreferences:
    default_sort: str = "name_asc"
    contacts_per_page: int = 10
    notifications_enabled: bool = True
    preferred_language: str = "English"


@dataclass(eq=False)
class User:
    """A registered account. Contacts and groups reference it by id."""

    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.FREE
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)
    preferences: ProfilePreferences = field(default_factory=ProfilePreferences)

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
