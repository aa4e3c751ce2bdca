"""Settings loading, logging setup and app wiring."""

import logging

import pytest

from mycontacts import create_app
from mycontacts.application import CommandInvoker, PersonDraft
from mycontacts.config import Settings, load_settings
from mycontacts.domain import PersonDetails, TagRegistry, new_person
from mycontacts.infrastructure import ContactAuditLogger
from mycontacts.logging_config import setup_logging

_VARS = (
    "MYCONTACTS_LOG_LEVEL",
    "MYCONTACTS_DEFAULT_REGION",
    "MYCONTACTS_ADMIN_EMAIL",
    "MYCONTACTS_ADMIN_PASSWORD",
    "MYCONTACTS_AUDIT_LOG",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_load_settings_from_environment(clean_env) -> None:
    clean_env.setenv("MYCONTACTS_LOG_LEVEL", "debug")
    clean_env.setenv("MYCONTACTS_DEFAULT_REGION", "it")
    clean_env.setenv("MYCONTACTS_AUDIT_LOG", "off")
    settings = load_settings(env_file="/nonexistent/.env")
    assert settings.log_level == "DEBUG"
    assert settings.default_region == "IT"
    assert settings.audit_log is False
    assert settings.admin_email is None


def test_load_settings_reads_env_file(clean_env, tmp_path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text(
        "MYCONTACTS_ADMIN_EMAIL=root@example.com\nMYCONTACTS_ADMIN_PASSWORD=Admin1234\n"
    )
    # load_dotenv writes into os.environ; register the names so monkeypatch undoes them.
    clean_env.setenv("MYCONTACTS_ADMIN_EMAIL", "")
    clean_env.delenv("MYCONTACTS_ADMIN_EMAIL")
    clean_env.setenv("MYCONTACTS_ADMIN_PASSWORD", "")
    clean_env.delenv("MYCONTACTS_ADMIN_PASSWORD")

    settings = load_settings(env_file)
    assert settings.admin_email == "root@example.com"
    assert settings.admin_password == "Admin1234"
    assert settings.audit_log is True


def test_environment_wins_over_env_file(clean_env, tmp_path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("MYCONTACTS_LOG_LEVEL=ERROR\n")
    clean_env.setenv("MYCONTACTS_LOG_LEVEL", "warning")
    assert load_settings(env_file).log_level == "WARNING"


def test_setup_logging_is_idempotent() -> None:
    logger = setup_logging("DEBUG")
    count = len(logger.handlers)
    assert setup_logging(logging.WARNING) is logger
    assert len(logger.handlers) == count
    assert logger.level == logging.WARNING
    setup_logging("INFO")


def test_create_app_bootstraps_admin_and_region() -> None:
    app = create_app(
        Settings(
            default_region="US",
            admin_email="root@example.com",
            admin_password="Admin1234",
            audit_log=False,
        )
    )
    admin = app.user_store.find_by_email("root@example.com")
    assert admin is not None and admin.is_admin
    session = app.users.authenticate("root@example.com", "Admin1234")
    assert session.user is admin
    contact = app.contacts.create_person(
        admin, PersonDraft(first_name="Ann", phones=("202 555 1234",))
    )
    assert contact.phone_numbers[0].number == "+12025551234"


def test_audit_observer_logs_deletions(caplog) -> None:
    app = create_app(Settings(audit_log=True))
    user = app.users.register("Dana", "dana@example.com", "Secret123")
    contact = app.contacts.create_person(user, PersonDraft(first_name="Ann"))
    with caplog.at_level(logging.INFO, logger="mycontacts.audit"):
        app.contacts.delete_contact(user, contact.id, invoker=CommandInvoker())
    assert "Contact deleted: Ann" in caplog.text


def test_audit_logger_accepts_custom_logger(caplog) -> None:
    audit = ContactAuditLogger(logging.getLogger("custom.audit"))
    contact = new_person("u1", PersonDetails("Ann"))
    with caplog.at_level(logging.INFO, logger="custom.audit"):
        audit.on_contact_tagged(contact, TagRegistry().intern("vip"))
    assert "Tag added: 'vip' to Ann" in caplog.text
