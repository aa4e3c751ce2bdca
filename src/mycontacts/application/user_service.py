"""Registration, login sessions, and account management."""

import logging
import threading
import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone

from mycontacts.application.commands import CommandInvoker
from mycontacts.application.contact_service import ContactService
from mycontacts.application.group_service import ContactGroupService
from mycontacts.application.ports import PasswordHasher, UserStore
from mycontacts.domain import (
    AccessDeniedError,
    AuthenticationError,
    NotFoundError,
    ProfilePreferences,
    SortOrder,
    User,
    UserRole,
    ValidationError,
)
from mycontacts.domain.validation import require_text, validate_email, validate_password

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Session:
    """A logged-in user. Each session keeps its own undo/redo history."""

    user: User
    token: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    invoker: CommandInvoker = field(default_factory=CommandInvoker)


class SessionStore:
    """Active sessions by token. Constructed once and passed to the user service."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self, user: User) -> Session:
        session = Session(user=user)
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get(self, token: str) -> Session | None:
        with self._lock:
            return self._sessions.get(token)

    def invalidate(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def invalidate_user(self, user_id: str) -> int:
        with self._lock:
            tokens = [t for t, s in self._sessions.items() if s.user.id == user_id]
            for token in tokens:
                del self._sessions[token]
        return len(tokens)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class UserService:
    def __init__(
        self,
        users: UserStore,
        hasher: PasswordHasher,
        sessions: SessionStore,
        contacts: ContactService | None = None,
        groups: ContactGroupService | None = None,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._sessions = sessions
        self._contacts = contacts
        self._groups = groups

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole | str = UserRole.FREE,
    ) -> User:
        """Create an account. Admins cannot be self-registered; use ensure_admin."""
        role = UserRole(role)
        if role is UserRole.ADMIN:
            raise ValidationError("Admin accounts cannot be registered.")
        return self._create(name, email, password, role)

    def ensure_admin(self, email: str, password: str, name: str = "Administrator") -> User:
        """Return the admin with this email, creating it if missing."""
        existing = self._users.find_by_email(validate_email(email))
        if existing is not None:
            if not existing.is_admin:
                raise ValidationError(f"{existing.email} exists and is not an admin.")
            return existing
        return self._create(name, email, password, UserRole.ADMIN)

    def _create(self, name: str, email: str, password: str, role: UserRole) -> User:
        name = require_text(name, "Name")
        email = validate_email(email)
        validate_password(password)
        if self._users.find_by_email(email) is not None:
            raise ValidationError(f"A user with email {email} already exists.")
        user = User(
            name=name,
            email=email,
            password_hash=self._hasher.hash(password),
            role=role,
        )
        self._users.save(user)
        logger.info("Registered %s user %s", role.value, user.id)
        return user

    def authenticate(self, email: str, password: str) -> Session:
        user = self._users.find_by_email((email or "").strip().lower())
        if user is None or not self._hasher.verify(password or "", user.password_hash):
            raise AuthenticationError("Invalid email or password.")
        session = self._sessions.create(user)
        logger.info("User %s logged in", user.id)
        return session

    def session(self, token: str) -> Session:
        session = self._sessions.get(token)
        if session is None:
            raise AuthenticationError("Session expired or unknown.")
        return session

    def current_user(self, token: str) -> User:
        return self.session(token).user

    def logout(self, token: str) -> None:
        self._sessions.invalidate(token)

    def list_users(self, requester: User) -> list[User]:
        if not requester.is_admin:
            raise AccessDeniedError("Only admins can list users.")
        return self._users.find_all()

    def delete_user(self, requester: User, email: str) -> None:
        """Admins may delete anyone; users only themselves. Removes contacts, groups, sessions."""
        target = self._users.find_by_email((email or "").strip().lower())
        if target is None:
            raise NotFoundError(f"User {email} not found.")
        if not requester.is_admin and requester.id != target.id:
            raise AccessDeniedError("You can only delete your own account.")
        if self._groups is not None:
            self._groups.delete_all_for_owner(target.id)
        if self._contacts is not None:
            self._contacts.delete_all_for_owner(target.id)
        self._sessions.invalidate_user(target.id)
        self._users.delete(target)
        logger.info("Deleted user %s", target.id)

    def change_password(self, user: User, old_password: str, new_password: str) -> None:
        if not self._hasher.verify(old_password or "", user.password_hash):
            raise AuthenticationError("Current password is incorrect.")
        validate_password(new_password)
        user.password_hash = self._hasher.hash(new_password)
        self._users.save(user)

    def update_profile(self, user: User, name: str) -> User:
        user.name = require_text(name, "Name")
        self._users.save(user)
        logger.info("Updated profile of user %s", user.id)
        return user

    def update_preferences(self, user: User, **changes) -> ProfilePreferences:
        """Update named preference fields. Unknown names raise ValidationError."""
        known = {f.name for f in fields(ProfilePreferences)}
        unknown = set(changes) - known
        if unknown:
            raise ValidationError(f"Unknown preferences: {', '.join(sorted(unknown))}.")
        if "default_sort" in changes:
            try:
                changes["default_sort"] = SortOrder(changes["default_sort"]).value
            except ValueError as exc:
                raise ValidationError(f"Unknown sort order: {changes['default_sort']!r}.") from exc
        if "contacts_per_page" in changes and int(changes["contacts_per_page"]) < 1:
            raise ValidationError("contacts_per_page must be at least 1.")
        for key, value in changes.items():
            setattr(user.preferences, key, value)
        self._users.save(user)
        return user.preferences
