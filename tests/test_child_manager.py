import re
import secrets
from datetime import datetime

import pytest
import pytz

from mathwizard.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    QuotaExceededError,
)
from mathwizard.models.child import ChildModel
from mathwizard.models.parent import ParentModel
from mathwizard.utils.child_manager import ChildManager, generate_child_password, year_to_group
from mathwizard.utils.credentials import is_hashed, parse_credential


@pytest.fixture
def children(db):
    return ChildManager(db)


def _parent(db, email="pat@example.com"):
    db.expire_all()
    return db.query(ParentModel).filter_by(email=email).one()


def test_quota_of_one(children, make_parent, db):
    make_parent(max_children=1)
    children.add_child("pat@example.com", "Alice", "alice", None, "year5")
    with pytest.raises(QuotaExceededError):
        children.add_child("pat@example.com", "Bob", "bob", None, "year5")

    assert _parent(db).children == ["alice"]
    assert db.query(ChildModel).filter_by(username="bob").first() is None


def test_zero_quota_rejects_first_child(children, make_parent):
    make_parent(max_children=0)
    with pytest.raises(QuotaExceededError):
        children.add_child("pat@example.com", "Alice", "alice")


def test_add_child_persists_record_and_roster(children, make_parent, db):
    make_parent()
    result = children.add_child("pat@example.com", "Alice", "alice", "Secret12", "year7")
    assert result == {"username": "alice", "password": "Secret12"}

    child = db.query(ChildModel).filter_by(username="alice").one()
    assert child.parent_email == "pat@example.com"
    assert child.year_group == 7
    assert is_hashed(child.password)
    assert parse_credential(child.password).verify("Secret12")
    assert _parent(db).children == ["alice"]


def test_generated_password_is_returned_once(children, make_parent, db):
    make_parent()
    result = children.add_child("pat@example.com", "Alice", "alice", "  ", "year1")
    assert re.fullmatch(r"[A-Z][a-z]+\d{4}", result["password"])
    child = db.query(ChildModel).filter_by(username="alice").one()
    assert child.password != result["password"]
    assert parse_credential(child.password).verify(result["password"])


def test_username_unique_across_parents(children, make_parent, db):
    make_parent(email="a@example.com")
    make_parent(email="b@example.com")
    children.add_child("a@example.com", "Alice", "alice")
    with pytest.raises(ConflictError):
        children.add_child("b@example.com", "Alice Too", "alice")
    assert _parent(db, "b@example.com").children == []
    assert db.query(ChildModel).filter_by(username="alice").count() == 1


def test_unknown_parent(children):
    with pytest.raises(NotFoundError):
        children.add_child("ghost@example.com", "Alice", "alice")
    with pytest.raises(NotFoundError):
        children.list_children("ghost@example.com")


def test_remove_child_not_owned_is_forbidden(children, make_parent, db):
    make_parent(email="a@example.com")
    make_parent(email="b@example.com")
    children.add_child("a@example.com", "Alice", "alice")

    with pytest.raises(ForbiddenError):
        children.remove_child("b@example.com", "alice")
    with pytest.raises(ForbiddenError):
        children.remove_child("a@example.com", "nobody")

    assert _parent(db, "a@example.com").children == ["alice"]
    assert db.query(ChildModel).filter_by(username="alice").count() == 1


def test_remove_child_frees_a_slot(children, make_parent, db):
    make_parent(max_children=1)
    children.add_child("pat@example.com", "Alice", "alice")
    children.remove_child("pat@example.com", "alice")

    assert _parent(db).children == []
    assert db.query(ChildModel).filter_by(username="alice").first() is None
    children.add_child("pat@example.com", "Bob", "bob")
    assert children.list_children("pat@example.com") == ["bob"]


def test_roster_never_exceeds_quota(children, make_parent, db):
    make_parent(max_children=2)
    ops = [
        ("add", "a"), ("add", "b"), ("add", "c"), ("remove", "a"),
        ("add", "d"), ("add", "e"), ("remove", "b"), ("remove", "d"),
        ("add", "f"), ("add", "g"), ("add", "h"),
    ]
    for op, username in ops:
        try:
            if op == "add":
                children.add_child("pat@example.com", username.upper(), username)
            else:
                children.remove_child("pat@example.com", username)
        except (QuotaExceededError, ForbiddenError):
            pass
        parent = _parent(db)
        assert len(parent.children) <= parent.max_children


def test_record_progress(children, make_parent):
    make_parent()
    children.add_child("pat@example.com", "Alice", "alice")
    children.record_progress("alice", "Counting to 5", 80)
    child = children.record_progress("alice", "Adding within 10", 100)
    assert [p["topic"] for p in child.progress] == ["Counting to 5", "Adding within 10"]
    assert child.progress[1]["score"] == 100
    assert "completedAt" in child.progress[0]


def test_get_missing_child(children):
    with pytest.raises(NotFoundError):
        children.get_child("nobody")


@pytest.mark.parametrize(
    "label, expected",
    [("reception", 0), ("year1", 1), ("Year11", 11), ("year12", 5), ("", 5), (None, 5)],
)
def test_year_to_group(label, expected):
    assert year_to_group(label) == expected


def test_generate_child_password_shape():
    assert re.fullmatch(r"[A-Z][a-z]+\d{4}", generate_child_password())


def _legacy_roster(db, email, children):
    db.add(
        ParentModel(
            parent_id=secrets.token_hex(12),
            name="Old Parent",
            email=email,
            password="plain-pw",
            children=children,
            max_children=3,
            verified=True,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
    )
    db.commit()


def test_username_on_legacy_roster_is_taken(children, make_parent, db):
    _legacy_roster(db, "old@example.com", ["alice"])
    make_parent(email="b@example.com")
    with pytest.raises(ConflictError):
        children.add_child("b@example.com", "Alice", "alice")
    assert _parent(db, "b@example.com").children == []
    assert db.query(ChildModel).filter_by(username="alice").first() is None


def test_remove_only_deletes_own_child_record(children, make_parent, db):
    _legacy_roster(db, "old@example.com", ["alice"])
    # Record left behind by an earlier owner
    db.add(
        ChildModel(
            child_id="c-other",
            name="Alice",
            username="alice",
            password="x",
            parent_email="b@example.com",
            year_group=5,
            progress=[],
            created_at=datetime.now(pytz.utc).isoformat(),
        )
    )
    db.commit()

    children.remove_child("old@example.com", "alice")

    assert _parent(db, "old@example.com").children == []
    assert db.query(ChildModel).filter_by(username="alice").one().parent_email == "b@example.com"
