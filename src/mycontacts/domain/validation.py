"""Input validation for contact fields: names, phone numbers, emails, passwords.

Phone numbers are normalized to E.164 for storage and search.
"""

import re
from collections.abc import Iterable

import phonenumbers

from mycontacts.domain.entities import (
    EmailAddress,
    OrganizationDetails,
    PersonDetails,
    PhoneNumber,
)
from mycontacts.domain.errors import ValidationError

DEFAULT_PHONE_LABEL = "Mobile"
DEFAULT_EMAIL_LABEL = "Personal"

_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*[a-z])(?=.*\d).{8,}$")


def normalize_phone(raw: str, default_region: str | None = None) -> str | None:
    """Parse and return E.164 form of the number, or None if invalid.

    Use default_region when the input has no leading + (e.g. "123 456 7890"
    with default_region "IT" for Italy). If the number already includes a
    country code, default_region is ignored.
    """
    if not raw or not str(raw).strip():
        return None
    raw = str(raw).strip()
    try:
        parsed = phonenumbers.parse(raw, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def require_text(value: str | None, field_name: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field_name} must be non-empty.")
    return text


def optional_text(value: str | None) -> str | None:
    return (value or "").strip() or None


def validate_phone(raw: str, default_region: str | None = None) -> str:
    normalized = normalize_phone(raw, default_region)
    if normalized is None:
        raise ValidationError(f"Invalid phone number: {raw!r}.")
    return normalized


def validate_email(raw: str | None) -> str:
    email = (raw or "").strip()
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError(f"Invalid email address: {raw!r}.")
    return email.lower()


def validate_password(raw: str | None) -> str:
    if not raw or not _PASSWORD_PATTERN.match(raw):
        raise ValidationError(
            "Password must contain upper and lower case letters and a digit (min 8 chars)."
        )
    return raw


def split_labeled(entry: str, default_label: str) -> tuple[str, str]:
    """Split "Work: value" into ("Work", "value"); bare values get default_label."""
    label, sep, value = entry.partition(":")
    if not sep:
        return default_label, entry.strip()
    return (label.strip() or default_label), value.strip()


def parse_phone_numbers(
    entries: Iterable[str | PhoneNumber] | None,
    default_region: str | None = None,
) -> list[PhoneNumber]:
    """Validate raw "label: number" entries (or PhoneNumber values). Blank entries are skipped."""
    out: list[PhoneNumber] = []
    for entry in entries or ():
        if isinstance(entry, PhoneNumber):
            label, number = entry.label, entry.number
        else:
            if not entry or not entry.strip():
                continue
            # "+1: 202..." is not a label; only split when the prefix has letters.
            label, number = split_labeled(entry, DEFAULT_PHONE_LABEL)
            if not any(ch.isalpha() for ch in label):
                label, number = DEFAULT_PHONE_LABEL, entry.strip()
        out.append(PhoneNumber(label=label, number=validate_phone(number, default_region)))
    return out


def parse_email_addresses(
    entries: Iterable[str | EmailAddress] | None,
) -> list[EmailAddress]:
    """Validate raw "label: address" entries (or EmailAddress values). Blank entries are skipped."""
    out: list[EmailAddress] = []
    for entry in entries or ():
        if isinstance(entry, EmailAddress):
            label, address = entry.label, entry.address
        else:
            if not entry or not entry.strip():
                continue
            label, address = split_labeled(entry, DEFAULT_EMAIL_LABEL)
        out.append(EmailAddress(label=label, address=validate_email(address)))
    return out


def validate_person_details(
    first_name: str | None, last_name: str | None
) -> PersonDetails:
    """At least one of first/last name is required."""
    first = optional_text(first_name) or ""
    last = optional_text(last_name) or ""
    if not first and not last:
        raise ValidationError("At least one name (first or last) is required.")
    return PersonDetails(first_name=first, last_name=last)


def validate_organization_details(
    name: str | None,
    department: str | None = None,
    website: str | None = None,
) -> OrganizationDetails:
    return OrganizationDetails(
        name=require_text(name, "Organization name"),
        department=optional_text(department),
        website=optional_text(website),
    )
