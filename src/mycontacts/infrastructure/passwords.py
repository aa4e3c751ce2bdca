"""Password hashing backed by passlib."""

from passlib.context import CryptContext


class PasslibPasswordHasher:
    """PasswordHasher using a passlib CryptContext (pbkdf2_sha256 by default)."""

    def __init__(self, schemes: list[str] | None = None) -> None:
        self._context = CryptContext(schemes=schemes or ["pbkdf2_sha256"], deprecated="auto")

    def hash(self, plain: str) -> str:
        return self._context.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return self._context.verify(plain, hashed)
        except ValueError:
            # Not a hash this context recognizes.
            return False
