"""Audit trail observer: writes contact deletions and tag changes to the audit logger."""

import logging

from mycontacts.domain import Contact, Tag

audit_logger = logging.getLogger("mycontacts.audit")


class ContactAuditLogger:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or audit_logger

    def on_contact_deleted(self, contact: Contact) -> None:
        self._logger.info(
            "Contact deleted: %s (id=%s, owner=%s)",
            contact.display_name,
            contact.id,
            contact.owner_id,
        )

    def on_contact_tagged(self, contact: Contact, tag: Tag) -> None:
        self._logger.info("Tag added: %r to %s (id=%s)", tag.name, contact.display_name, contact.id)

    def on_contact_untagged(self, contact: Contact, tag: Tag) -> None:
        self._logger.info(
            "Tag removed: %r from %s (id=%s)", tag.name, contact.display_name, contact.id
        )
