"""Plain-text detail blocks and the view transforms applied on top of them.

Transforms are str -> str functions; combine them with compose().
"""

import re
from collections.abc import Callable
from functools import reduce
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mycontacts.domain.entities import Contact

Formatter = Callable[[str], str]

_EMAIL_IN_TEXT = re.compile(r"([A-Za-z0-9])[A-Za-z0-9+_.-]*@([A-Za-z0-9.-]+)")


def render_details(contact: "Contact") -> str:
    lines = [
        f"Name: {contact.display_name}",
        f"Type: {contact.kind.value}",
        f"Created At: {contact.created_at.isoformat(timespec='seconds')}",
        f"Access Count: {contact.access_count}",
    ]
    if not contact.active:
        lines.append("Status: deleted")
    if contact.phone_numbers:
        lines.append("Phone Numbers:")
        lines.extend(f"  - {phone}" for phone in contact.phone_numbers)
    if contact.email_addresses:
        lines.append("Emails:")
        lines.extend(f"  - {email}" for email in contact.email_addresses)
    if contact.tags:
        lines.append("Tags: " + ", ".join(sorted(contact.tag_names, key=str.lower)))
    return "\n".join(lines)


def uppercase(text: str) -> str:
    return text.upper()


def mask_emails(text: str) -> str:
    """Replace the local part of every email address with its first char + '***'."""
    return _EMAIL_IN_TEXT.sub(r"\1***@\2", text)


def compose(*formatters: Formatter) -> Formatter:
    """Apply formatters left to right."""
    return lambda text: reduce(lambda acc, fn: fn(acc), formatters, text)
