"""Wiring: build stores and services for one process."""

import logging
from dataclasses import dataclass

from mycontacts.application import (
    ContactEvents,
    ContactGroupService,
    ContactQueryService,
    ContactService,
    SessionStore,
    UserService,
)
from mycontacts.config import Settings, load_settings
from mycontacts.domain import TagRegistry
from mycontacts.infrastructure import (
    ContactAuditLogger,
    InMemoryContactStore,
    InMemoryGroupStore,
    InMemoryUserStore,
    PasslibPasswordHasher,
)
from mycontacts.logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class App:
    settings: Settings
    tags: TagRegistry
    contact_store: InMemoryContactStore
    group_store: InMemoryGroupStore
    user_store: InMemoryUserStore
    sessions: SessionStore
    events: ContactEvents
    query: ContactQueryService
    contacts: ContactService
    groups: ContactGroupService
    users: UserService


def create_app(settings: Settings | None = None) -> App:
    """Build a fully wired in-memory app. Reads the environment when settings is None."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    tags = TagRegistry()
    contact_store = InMemoryContactStore()
    group_store = InMemoryGroupStore()
    user_store = InMemoryUserStore()
    sessions = SessionStore()
    events = ContactEvents()
    if settings.audit_log:
        events.add_observer(ContactAuditLogger())

    contacts = ContactService(
        contact_store, tags, events, default_region=settings.default_region
    )
    groups = ContactGroupService(group_store, contact_store, tags, events)
    users = UserService(
        user_store, PasslibPasswordHasher(), sessions, contacts=contacts, groups=groups
    )
    if settings.admin_email and settings.admin_password:
        users.ensure_admin(settings.admin_email, settings.admin_password)
        logger.info("Admin account ready: %s", settings.admin_email)

    return App(
        settings=settings,
        tags=tags,
        contact_store=contact_store,
        group_store=group_store,
        user_store=user_store,
        sessions=sessions,
        events=events,
        query=ContactQueryService(contact_store),
        contacts=contacts,
        groups=groups,
        users=users,
    )
