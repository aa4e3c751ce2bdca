"""Tests for ContactGroupService through the wired app."""

import pytest

from mycontacts.application import CommandInvoker, PersonDraft
from mycontacts.domain import (
    AccessDeniedError,
    DuplicateMembershipError,
    NotFoundError,
    ValidationError,
)


class TagRecorder:
    def __init__(self) -> None:
        self.tagged: list[tuple[str, str]] = []
        self.deleted: list[str] = []

    def on_contact_deleted(self, contact) -> None:
        self.deleted.append(contact.display_name)

    def on_contact_tagged(self, contact, tag) -> None:
        self.tagged.append((contact.display_name, tag.name))

    def on_contact_untagged(self, contact, tag) -> None:
        pass


@pytest.fixture
def ben(app, alice):
    return app.contacts.create_person(alice, PersonDraft(first_name="Ben"))


def test_create_group_with_members(app, alice, ann, ben) -> None:
    group = app.groups.create_group(alice, " Friends ", [ann, ben])
    assert group.name == "Friends"
    assert group.members == [ann, ben]
    assert app.groups.groups_for(alice) == [group]
    with pytest.raises(ValidationError):
        app.groups.create_group(alice, "  ")


def test_duplicate_membership_is_rejected(app, alice, ann) -> None:
    group = app.groups.create_group(alice, "Friends", [ann])
    with pytest.raises(DuplicateMembershipError):
        app.groups.add_member(alice, group.id, ann)
    with pytest.raises(DuplicateMembershipError):
        app.groups.create_group(alice, "Twice", [ann, ann])


def test_cycles_are_rejected(app, alice) -> None:
    outer = app.groups.create_group(alice, "Outer")
    inner = app.groups.create_group(alice, "Inner")
    app.groups.add_member(alice, outer.id, inner)
    with pytest.raises(ValidationError):
        app.groups.add_member(alice, inner.id, outer)
    with pytest.raises(ValidationError):
        app.groups.add_member(alice, outer.id, outer)


def test_other_users_cannot_touch_group(app, alice, bob, admin, ann) -> None:
    group = app.groups.create_group(alice, "Friends", [ann])
    with pytest.raises(AccessDeniedError):
        app.groups.get_group(bob, group.id)
    with pytest.raises(AccessDeniedError):
        app.groups.tag_group(bob, group.id, "x", invoker=CommandInvoker())
    with pytest.raises(NotFoundError):
        app.groups.get_group(alice, "missing")
    assert app.groups.get_group(admin, group.id) is group
    assert app.groups.groups_for(bob) == []
    assert app.groups.groups_for(admin) == [group]


def test_add_contact_requires_visibility(app, alice, bob, ann) -> None:
    bobs = app.groups.create_group(bob, "Bob's")
    with pytest.raises(NotFoundError):
        app.groups.add_contact(bob, bobs.id, ann.id)
    mine = app.groups.create_group(alice, "Mine")
    app.groups.add_contact(alice, mine.id, ann.id)
    assert mine.has_member_id(ann.id)


def test_tag_group_cascades_and_notifies(app, alice, ann, ben, invoker) -> None:
    recorder = TagRecorder()
    app.events.add_observer(recorder)
    inner = app.groups.create_group(alice, "Inner", [ben])
    outer = app.groups.create_group(alice, "Outer", [ann, inner])

    app.groups.tag_group(alice, outer.id, "team", invoker=invoker)
    assert ann.tag_names == {"team"}
    assert ben.tag_names == {"team"}
    assert recorder.tagged == [("Ann Lee", "team"), ("Ben", "team")]
    assert "team" in app.contacts.available_tags()

    app.groups.untag_group(alice, inner.id, "team", invoker=invoker)
    assert ben.tag_names == set()
    assert ann.tag_names == {"team"}
    assert app.groups.untag_group(alice, outer.id, "unknown", invoker=invoker) is outer


def test_delete_group_soft_deletes_members(app, alice, ann, ben, invoker) -> None:
    recorder = TagRecorder()
    app.events.add_observer(recorder)
    group = app.groups.create_group(alice, "Friends", [ann, ben])
    app.groups.delete_group(alice, group.id, invoker=invoker)

    assert not ann.active and not ben.active
    assert recorder.deleted == ["Ann Lee", "Ben"]
    assert app.query.list_visible(alice) == []
    with pytest.raises(NotFoundError):
        app.groups.get_group(alice, group.id)


def test_group_details_and_rename(app, alice, ann) -> None:
    group = app.groups.create_group(alice, "Friends", [ann])
    app.groups.rename_group(alice, group.id, "Close friends")
    text = app.groups.group_details(alice, group.id)
    assert text.startswith("Group: Close friends")
    assert "Name: Ann Lee" in text


def test_remove_member(app, alice, ann, ben) -> None:
    group = app.groups.create_group(alice, "Friends", [ann, ben])
    app.groups.remove_member(alice, group.id, ann)
    assert group.members == [ben]
    app.groups.remove_member(alice, group.id, ann)
    assert group.members == [ben]


def test_group_tag_survives_undo_of_earlier_edit(app, alice, ann, ben, invoker) -> None:
    group = app.groups.create_group(alice, "Friends", [ann, ben])
    app.contacts.rename(alice, ann.id, "Anna Lee", invoker=invoker)
    app.groups.tag_group(alice, group.id, "vip", invoker=invoker)

    # The whole cascade is one step.
    assert app.contacts.undo(invoker) == [ann, ben]
    assert ann.tag_names == set() and ben.tag_names == set()
    assert app.contacts.redo(invoker) == [ann, ben]
    assert ann.tag_names == {"vip"} and ben.tag_names == {"vip"}

    app.contacts.undo(invoker)
    app.contacts.undo(invoker)
    app.contacts.redo(invoker)
    app.contacts.redo(invoker)
    assert ann.display_name == "Anna Lee"
    assert ann.tag_names == {"vip"}


def test_group_cascade_skips_contacts_already_in_target_state(
    app, alice, ann, ben, invoker
) -> None:
    recorder = TagRecorder()
    app.events.add_observer(recorder)
    app.contacts.tag_contact(alice, ann.id, "vip", invoker=invoker)
    group = app.groups.create_group(alice, "Friends", [ann, ben])
    app.groups.tag_group(alice, group.id, "vip", invoker=invoker)
    assert recorder.tagged == [("Ann Lee", "vip"), ("Ben", "vip")]

    app.groups.tag_group(alice, group.id, "vip", invoker=invoker)
    assert len(invoker.undo_history) == 2
    assert len(recorder.tagged) == 2


def test_delete_group_is_undoable_and_ignores_removed_contacts(
    app, alice, ann, ben, invoker
) -> None:
    group = app.groups.create_group(alice, "Friends", [ann, ben])
    app.contacts.rename(alice, ann.id, "Anna Lee", invoker=invoker)
    app.contacts.hard_delete_contact(alice, ben.id)
    app.groups.delete_group(alice, group.id, invoker=invoker)

    assert app.contact_store.find_by_id(ben.id) is None
    assert app.query.list_visible(alice) == []
    assert app.contacts.undo(invoker) == [ann]
    assert app.query.list_visible(alice) == [ann]
    assert ann.display_name == "Anna Lee"
    app.contacts.undo(invoker)
    app.contacts.undo(invoker)
    assert app.contact_store.find_by_id(ben.id) is None
    assert ann.display_name == "Ann Lee"
