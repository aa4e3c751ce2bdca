"""Unit tests for Contact, tags, mementos and detail formatting."""

from datetime import datetime, timezone

import pytest

from mycontacts.domain import (
    CommandStateError,
    Contact,
    ContactKind,
    EmailAddress,
    OrganizationDetails,
    PersonDetails,
    PhoneNumber,
    TagRegistry,
    ValidationError,
    capture,
    new_organization,
    new_person,
    restore,
)
from mycontacts.domain.formatting import compose, mask_emails, uppercase


def _ann() -> Contact:
    return new_person(
        "u1",
        PersonDetails(first_name="Ann", last_name="Lee"),
        [PhoneNumber("Mobile", "+12025551234")],
        [EmailAddress("Personal", "ann@example.com")],
    )


def test_display_name_per_variant() -> None:
    assert _ann().display_name == "Ann Lee"
    assert new_person("u1", PersonDetails(first_name="Cher")).display_name == "Cher"
    acme = new_organization("u1", OrganizationDetails(name="Acme", department="Sales"))
    assert acme.display_name == "Acme (Sales)"
    assert acme.kind is ContactKind.ORGANIZATION
    assert new_organization("u1", OrganizationDetails(name="Acme")).display_name == "Acme"


def test_new_contact_defaults() -> None:
    ann = _ann()
    assert ann.active is True
    assert ann.access_count == 0
    assert ann.tags == set()
    assert ann.kind is ContactKind.PERSON
    assert ann.created_at.tzinfo is not None


def test_identity_fields_are_immutable() -> None:
    ann = _ann()
    with pytest.raises(AttributeError):
        ann.id = "other"
    with pytest.raises(AttributeError):
        ann.owner_id = "u2"
    with pytest.raises(AttributeError):
        ann.created_at = datetime.now(timezone.utc)


def test_contact_requires_owner() -> None:
    with pytest.raises(ValueError):
        new_person("", PersonDetails(first_name="Ann"))


def test_tag_registry_interns_by_trimmed_name() -> None:
    registry = TagRegistry()
    a = registry.intern("friend")
    b = registry.intern("  friend ")
    assert a is b
    assert len(registry) == 1
    assert registry.intern("Friend") is not a
    assert "friend" in registry
    assert registry.get("missing") is None
    assert len(registry) == 2


def test_tag_registry_rejects_blank() -> None:
    with pytest.raises(ValidationError):
        TagRegistry().intern("   ")


def test_memento_is_independent_of_live_contact() -> None:
    registry = TagRegistry()
    ann = _ann()
    ann.add_tag(registry.intern("friend"))
    memento = capture(ann)

    ann.phone_numbers.append(PhoneNumber("Work", "+393123456789"))
    ann.add_tag(registry.intern("work"))
    ann.details = PersonDetails(first_name="Anna", last_name="Lee")
    ann.active = False

    assert memento.phone_numbers == (PhoneNumber("Mobile", "+12025551234"),)
    assert {t.name for t in memento.tags} == {"friend"}
    assert memento.details.first_name == "Ann"
    assert memento.active is True


def test_restore_keeps_identity_and_access_count() -> None:
    ann = _ann()
    memento = capture(ann)
    ann.record_access()
    ann.details = PersonDetails(first_name="Anna")
    ann.email_addresses = []

    original_id, created = ann.id, ann.created_at
    restore(ann, memento)

    assert ann.display_name == "Ann Lee"
    assert ann.email_addresses == [EmailAddress("Personal", "ann@example.com")]
    assert ann.id == original_id
    assert ann.created_at == created
    assert ann.access_count == 1


def test_restore_rejects_memento_of_another_contact() -> None:
    ann, other = _ann(), _ann()
    with pytest.raises(CommandStateError):
        restore(other, capture(ann))
    assert other.display_name == "Ann Lee"


def test_restored_lists_are_not_shared_with_memento() -> None:
    ann = _ann()
    memento = capture(ann)
    restore(ann, memento)
    ann.phone_numbers.clear()
    assert len(memento.phone_numbers) == 1


def test_details_text_and_formatters() -> None:
    registry = TagRegistry()
    ann = _ann()
    ann.add_tag(registry.intern("vip"))
    text = ann.details_text()
    assert "Name: Ann Lee" in text
    assert "Mobile: +12025551234" in text
    assert "Personal: ann@example.com" in text
    assert "Tags: vip" in text

    masked = mask_emails(text)
    assert "a***@example.com" in masked
    assert "ann@example.com" not in masked

    shout_masked = compose(mask_emails, uppercase)(text)
    assert "NAME: ANN LEE" in shout_masked
    assert "A***@EXAMPLE.COM" in shout_masked
