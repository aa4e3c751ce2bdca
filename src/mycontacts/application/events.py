"""Fan-out of contact notifications to registered observers."""

import logging

from mycontacts.application.ports import ContactObserver
from mycontacts.domain import Contact, Tag

logger = logging.getLogger(__name__)


class ContactEvents:
    """Notifies every observer in registration order. An observer that raises is logged and skipped."""

    def __init__(self) -> None:
        self._observers: list[ContactObserver] = []

    def add_observer(self, observer: ContactObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: ContactObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def contact_deleted(self, contact: Contact) -> None:
        self._notify("on_contact_deleted", contact)

    def contact_tagged(self, contact: Contact, tag: Tag) -> None:
        self._notify("on_contact_tagged", contact, tag)

    def contact_untagged(self, contact: Contact, tag: Tag) -> None:
        self._notify("on_contact_untagged", contact, tag)

    def _notify(self, hook: str, *args) -> None:
        for observer in list(self._observers):
            try:
                getattr(observer, hook)(*args)
            except Exception:
                logger.exception(
                    "Observer %s failed in %s", type(observer).__name__, hook
                )
