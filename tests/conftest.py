"""Shared fixtures: a wired in-memory app and a few users."""

import pytest

from mycontacts import App, create_app
from mycontacts.application import CommandInvoker, PersonDraft
from mycontacts.config import Settings
from mycontacts.domain import Contact, User


@pytest.fixture
def app() -> App:
    return create_app(Settings(audit_log=False))


@pytest.fixture
def invoker() -> CommandInvoker:
    return CommandInvoker()


@pytest.fixture
def alice(app: App) -> User:
    return app.users.register("Alice", "alice@example.com", "Secret123")


@pytest.fixture
def bob(app: App) -> User:
    return app.users.register("Bob", "bob@example.com", "Secret123", role="premium")


@pytest.fixture
def admin(app: App) -> User:
    return app.users.ensure_admin("admin@example.com", "Admin1234")


@pytest.fixture
def ann(app: App, alice: User) -> Contact:
    """Alice's contact "Ann Lee"."""
    return app.contacts.create_person(
        alice,
        PersonDraft(
            first_name="Ann",
            last_name="Lee",
            phones=("+1 202 555 1234",),
            emails=("ann@example.com",),
        ),
    )
