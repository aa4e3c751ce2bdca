"""Input structs passed in by the presentation layer, and their validation."""

from dataclasses import dataclass, field

from mycontacts.domain.entities import (
    EmailAddress,
    OrganizationDetails,
    PersonDetails,
    PhoneNumber,
)
from mycontacts.domain.validation import (
    parse_email_addresses,
    parse_phone_numbers,
    validate_organization_details,
    validate_person_details,
)


@dataclass(frozen=True)
class PersonDraft:
    """Raw fields for a new person. Phones/emails are "label: value" strings or bare values."""

    first_name: str | None = None
    last_name: str | None = None
    phones: tuple[str, ...] = field(default_factory=tuple)
    emails: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OrganizationDraft:
    """Raw fields for a new organization."""

    name: str | None = None
    department: str | None = None
    website: str | None = None
    phones: tuple[str, ...] = field(default_factory=tuple)
    emails: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ValidContact:
    """Validated fields, ready for new_person / new_organization."""

    details: PersonDetails | OrganizationDetails
    phone_numbers: list[PhoneNumber]
    email_addresses: list[EmailAddress]


def validate_person_draft(
    draft: PersonDraft, default_region: str | None = None
) -> ValidContact:
    return ValidContact(
        details=validate_person_details(draft.first_name, draft.last_name),
        phone_numbers=parse_phone_numbers(draft.phones, default_region),
        email_addresses=parse_email_addresses(draft.emails),
    )


def validate_organization_draft(
    draft: OrganizationDraft, default_region: str | None = None
) -> ValidContact:
    return ValidContact(
        details=validate_organization_details(draft.name, draft.department, draft.website),
        phone_numbers=parse_phone_numbers(draft.phones, default_region),
        email_addresses=parse_email_addresses(draft.emails),
    )
