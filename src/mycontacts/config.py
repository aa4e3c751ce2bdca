"""Settings from environment variables, with an optional .env file."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Repo root: from src/mycontacts/config.py go up to repo root
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent

_TRUE = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    # Region used to parse phone numbers written without a leading +, e.g. "US".
    default_region: str | None = None
    admin_email: str | None = None
    admin_password: str | None = None
    audit_log: bool = True


def _env(name: str) -> str | None:
    return (os.environ.get(name) or "").strip() or None


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Load .env (explicit path, else repo root or cwd) and read MYCONTACTS_* variables.

    Variables already set in the environment win over the .env file.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
            if path.exists():
                load_dotenv(path)
                break

    region = _env("MYCONTACTS_DEFAULT_REGION")
    audit = _env("MYCONTACTS_AUDIT_LOG")
    return Settings(
        log_level=(_env("MYCONTACTS_LOG_LEVEL") or "INFO").upper(),
        default_region=region.upper() if region else None,
        admin_email=_env("MYCONTACTS_ADMIN_EMAIL"),
        admin_password=_env("MYCONTACTS_ADMIN_PASSWORD"),
        audit_log=True if audit is None else audit.lower() in _TRUE,
    )
