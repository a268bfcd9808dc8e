import secrets
from datetime import datetime

import pytest
import pytz

from mathwizard.core.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnverifiedError,
    ValidationError,
)
from mathwizard.models.child import ChildModel
from mathwizard.models.parent import ParentModel
from mathwizard.schemas.user import AdminCredentials
from mathwizard.utils.account_manager import AccountManager
from mathwizard.utils.credentials import is_hashed

from conftest import ADMIN


def _legacy_parent(db, email="old@example.com", password="plain-pw", children=None):
    parent = ParentModel(
        parent_id=secrets.token_hex(12),
        name="Old Parent",
        email=email,
        password=password,
        children=children or [],
        max_children=3,
        verified=True,
        created_at=datetime.now(pytz.utc).isoformat(),
    )
    db.add(parent)
    db.commit()
    return parent


def test_register_parent_is_unverified_with_token_and_code(accounts):
    parent = accounts.register_parent("Pat", "pat@example.com", "pw", 2)
    assert parent.verified is False
    assert parent.verification_token
    assert len(parent.verification_code) == 6
    assert is_hashed(parent.password)
    assert parent.children == []


def test_register_duplicate_email_conflicts(accounts):
    accounts.register_parent("Pat", "pat@example.com", "pw", 2)
    with pytest.raises(ConflictError):
        accounts.register_parent("Pat", "pat@example.com", "pw", 2)
    with pytest.raises(ConflictError):
        accounts.register_school("School", "pat@example.com", "pw", 3)


def test_school_is_verified_at_registration(accounts):
    school = accounts.register_school("Hill School", "head@hill.sch", "pw", 5)
    assert school.verified is True
    principal = accounts.login("head@hill.sch", "pw")
    assert principal.role == "school"
    assert principal.name == "Hill School"


def test_token_verification_clears_both_credentials(accounts):
    parent = accounts.register_parent("Pat", "pat@example.com", "pw", 2)
    token, code = parent.verification_token, parent.verification_code

    accounts.verify_by_token(token)
    assert parent.verified is True
    assert parent.verification_token is None
    assert parent.verification_code is None

    with pytest.raises(ValidationError):
        accounts.verify_by_token(token)
    with pytest.raises(ValidationError):
        accounts.verify_by_code("pat@example.com", code)


def test_code_verification(accounts):
    parent = accounts.register_parent("Pat", "pat@example.com", "pw", 2)
    with pytest.raises(ValidationError):
        accounts.verify_by_code("pat@example.com", "000000")
    accounts.verify_by_code("pat@example.com", parent.verification_code)
    assert parent.verified is True
    assert parent.verification_token is None


def test_missing_token_is_invalid(accounts):
    with pytest.raises(ValidationError):
        accounts.verify_by_token(None)


def test_admin_login_uses_static_credentials(accounts):
    principal = accounts.login(ADMIN.email, ADMIN.password)
    assert principal.role == "admin"
    with pytest.raises(InvalidCredentialsError):
        accounts.login(ADMIN.email, "wrong")


def test_admin_login_disabled_without_credentials(db):
    manager = AccountManager(db, AdminCredentials())
    with pytest.raises(InvalidCredentialsError):
        manager.login("", "")


def test_parent_login(accounts, make_parent):
    make_parent(email="pat@example.com", password="pw", max_children=3)
    principal = accounts.login("pat@example.com", "pw")
    assert principal.role == "parent"
    assert principal.maxChildren == 3
    assert principal.availableChildSlots == 3
    assert principal.children == []


def test_unknown_email_and_wrong_password_share_one_error(accounts, make_parent):
    make_parent(email="pat@example.com", password="pw")
    with pytest.raises(InvalidCredentialsError) as unknown:
        accounts.login("nobody@example.com", "pw")
    with pytest.raises(InvalidCredentialsError) as wrong:
        accounts.login("pat@example.com", "nope")
    assert unknown.value.message == wrong.value.message


def test_unverified_reported_only_after_password_matches(accounts):
    accounts.register_parent("Pat", "pat@example.com", "pw", 2)
    with pytest.raises(InvalidCredentialsError):
        accounts.login("pat@example.com", "wrong")
    with pytest.raises(UnverifiedError):
        accounts.login("pat@example.com", "pw")


def test_legacy_password_upgraded_on_login(db, accounts):
    _legacy_parent(db, password="plain-pw")
    accounts.login("old@example.com", "plain-pw")

    db.expire_all()
    stored = db.query(ParentModel).filter_by(email="old@example.com").one().password
    assert is_hashed(stored)
    # Still logs in with the same password after the upgrade
    assert accounts.login("old@example.com", "plain-pw").role == "parent"


def test_legacy_password_not_upgraded_on_failed_login(db, accounts):
    _legacy_parent(db, password="plain-pw")
    with pytest.raises(InvalidCredentialsError):
        accounts.login("old@example.com", "guess")
    db.expire_all()
    assert db.query(ParentModel).filter_by(email="old@example.com").one().password == "plain-pw"


def test_child_login_with_record(db, accounts, make_parent):
    from mathwizard.utils.child_manager import ChildManager

    make_parent(email="pat@example.com")
    ChildManager(db).add_child("pat@example.com", "Alice", "alice", "Duck1234", "year3")

    principal = accounts.login_child("alice", "Duck1234")
    assert principal.role == "child"
    assert principal.yearGroup == 3
    assert principal.legacy is False
    with pytest.raises(InvalidCredentialsError):
        accounts.login_child("alice", "Duck9999")


def test_child_login_upgrades_legacy_password(db, accounts):
    db.add(
        ChildModel(
            child_id="c1",
            name="Bo",
            username="bo",
            password="Tiger1111",
            parent_email="pat@example.com",
            year="year2",
            year_group=2,
            progress=[],
            created_at=datetime.now(pytz.utc).isoformat(),
        )
    )
    db.commit()
    accounts.login_child("bo", "Tiger1111")
    db.expire_all()
    assert is_hashed(db.query(ChildModel).filter_by(username="bo").one().password)


def test_child_listed_only_on_parent_logs_in_with_any_password(db, accounts):
    _legacy_parent(db, children=["legacy_kid"])
    principal = accounts.login_child("legacy_kid", "whatever")
    assert principal.role == "child"
    assert principal.yearGroup == 5
    assert principal.legacy is True


def test_unknown_child_rejected(db, accounts):
    _legacy_parent(db, children=["legacy_kid"])
    with pytest.raises(InvalidCredentialsError):
        accounts.login_child("legacy", "whatever")


def test_check_email(accounts, make_parent):
    make_parent(email="pat@example.com")
    accounts.register_school("Hill", "head@hill.sch", "pw", 2)
    assert accounts.check_email(ADMIN.email) == "admin"
    assert accounts.check_email("pat@example.com") == "parent"
    assert accounts.check_email("head@hill.sch") == "school"
    with pytest.raises(NotFoundError):
        accounts.check_email("ghost@example.com")


@pytest.mark.parametrize("username", ["zoë", "ó'brien", 'o"neil', "back\\slash", "50%_off"])
def test_legacy_child_login_with_special_characters(db, accounts, username):
    _legacy_parent(db, children=["someone", username])
    principal = accounts.login_child(username, "anything")
    assert principal.username == username
    assert principal.legacy is True


def test_legacy_listing_does_not_treat_wildcards_as_patterns(db, accounts):
    _legacy_parent(db, children=["alice"])
    assert accounts.find_parent_listing("al_ce") is None
    assert accounts.find_parent_listing("a%") is None
    assert accounts.find_parent_listing("alice").email == "old@example.com"
