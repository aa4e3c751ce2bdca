"""Error kinds raised by the core. All are recoverable by the caller."""


class ContactsError(Exception):
    """Base class for every error raised by mycontacts."""


class ValidationError(ContactsError, ValueError):
    """Malformed input to a constructor, setter or command action."""


class NotFoundError(ContactsError, LookupError):
    """Unknown id, or an entity the requester is not allowed to see."""


class AccessDeniedError(ContactsError, PermissionError):
    """Requester is neither the owner nor an admin."""


class DuplicateMembershipError(ContactsError):
    """Component is already a direct member of the group."""


class AuthenticationError(ContactsError):
    """Bad credentials or unknown session token."""


class CommandStateError(ContactsError, RuntimeError):
    """Illegal command state transition (a programming error)."""
