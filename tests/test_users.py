"""User store tests."""

from datetime import UTC, datetime, timedelta

import pytest

from sample_app.models.micropost import Micropost
from sample_app.models.user import User
from sample_app.services import users as user_store
from sample_app.services.users import (
    TAKEN,
    FieldError,
    ValidationFailed,
    create_user,
    delete_user,
    get_user,
    get_user_by_email,
    has_password,
    toggle_admin,
    update_user,
    validate_user,
)


def error_fields(db, **attrs):
    return {e.field for e in validate_user(db, **attrs)}


def test_create_user_with_valid_attributes(db, attrs):
    """Test creating a user from valid attributes."""
    user = create_user(db, **attrs)
    assert user.id is not None
    assert user.name == "Example User"
    assert user.admin is False


def test_require_name(db, attrs):
    """Test that a blank name is rejected."""
    assert error_fields(db, **{**attrs, "name": ""}) == {"name"}


def test_require_email(db, attrs):
    """Test that a blank email is rejected."""
    assert error_fields(db, **{**attrs, "email": ""}) == {"email"}


def test_reject_long_name(db, attrs):
    """Test that names over 50 characters are rejected."""
    assert error_fields(db, **{**attrs, "name": "a" * 51}) == {"name"}
    assert error_fields(db, **{**attrs, "name": "a" * 50}) == set()


@pytest.mark.parametrize("address", ["user@foo.com", "THE_USER@foo.bar.org", "first.last@foo.jp"])
def test_accept_valid_email(db, attrs, address):
    """Test that well-formed addresses pass."""
    assert validate_user(db, **{**attrs, "email": address}) == []


@pytest.mark.parametrize("address", ["user@foo,com", "user_at_foo.org", "example.user@foo."])
def test_reject_invalid_email(db, attrs, address):
    """Test that malformed addresses fail."""
    errors = validate_user(db, **{**attrs, "email": address})
    assert [(e.field, e.message) for e in errors] == [("email", "is invalid")]


def test_reject_duplicate_email(db, attrs, user):
    """Test that a taken email is rejected."""
    assert error_fields(db, **attrs) == {"email"}


def test_reject_duplicate_email_differing_in_case(db, attrs):
    """Test that email uniqueness ignores case."""
    create_user(db, **attrs)

    with pytest.raises(ValidationFailed) as exc_info:
        create_user(db, **{**attrs, "email": "USER@example.com"})

    assert [e.field for e in exc_info.value.errors] == ["email"]
    assert db.query(User).count() == 1


def test_unique_index_rejects_case_variant(db, attrs, user):
    """Test that the datastore itself refuses a second email differing only in case."""
    from sqlalchemy.exc import IntegrityError

    db.add(
        User(
            name="Sneaky",
            email="User@Example.com",
            salt="s",
            encrypted_password="e",
        )
    )
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_failed_create_persists_nothing(db, attrs):
    """Test that an invalid user is rejected as a whole."""
    with pytest.raises(ValidationFailed) as exc_info:
        create_user(db, **{**attrs, "name": "", "password_confirmation": "invalid"})

    assert {e.field for e in exc_info.value.errors} == {"name", "password"}
    assert db.query(User).count() == 0


def test_require_password(db, attrs):
    """Test that a blank password is rejected."""
    assert error_fields(db, **{**attrs, "password": "", "password_confirmation": ""}) == {
        "password"
    }


def test_require_matching_confirmation(db, attrs):
    """Test that the confirmation must match."""
    errors = validate_user(db, **{**attrs, "password_confirmation": "invalid"})
    assert [(e.field, e.message) for e in errors] == [("password", "doesn't match confirmation")]


@pytest.mark.parametrize("length", [5, 41])
def test_reject_password_length(db, attrs, length):
    """Test that passwords outside 6-40 characters are rejected."""
    password = "a" * length
    assert error_fields(
        db, **{**attrs, "password": password, "password_confirmation": password}
    ) == {"password"}


def test_encrypted_password_and_salt_are_set(user):
    """Test that a created user carries a salt and a digest, not the password."""
    assert user.salt
    assert user.encrypted_password
    assert user.encrypted_password != "foobar"


def test_has_password(user):
    """Test checking a submitted password."""
    assert has_password(user, "foobar") is True
    assert has_password(user, "invalid") is False


def test_salts_differ_between_users(db, attrs, user):
    """Test that two users with the same password get different digests."""
    other = create_user(db, **{**attrs, "email": "other@example.com"})
    assert other.salt != user.salt
    assert other.encrypted_password != user.encrypted_password


def test_password_change_keeps_salt(db, user):
    """Test that a new password is digested with the original salt."""
    salt = user.salt
    old_digest = user.encrypted_password

    update_user(db, user, password="newsecret", password_confirmation="newsecret")

    assert user.salt == salt
    assert user.encrypted_password != old_digest
    assert has_password(user, "newsecret") is True
    assert has_password(user, "foobar") is False


def test_update_without_password_keeps_digest(db, user):
    """Test that a profile update leaves the password alone."""
    digest = user.encrypted_password

    update_user(db, user, name="New Name")

    assert user.name == "New Name"
    assert user.encrypted_password == digest


def test_update_may_keep_own_email(db, user):
    """Test that a user's own email does not count as taken."""
    update_user(db, user, email="USER@example.com")
    assert user.email == "USER@example.com"


def test_update_rejects_invalid_password(db, user):
    """Test that password rules apply to updates."""
    with pytest.raises(ValidationFailed):
        update_user(db, user, password="short", password_confirmation="short")


def test_lookup_by_email_ignores_case(db, user):
    """Test finding a user by email in any case."""
    assert get_user_by_email(db, "USER@EXAMPLE.COM").id == user.id
    assert get_user_by_email(db, "nobody@example.com") is None
    assert get_user(db, user.id).id == user.id
    assert get_user(db, None) is None


def test_admin_toggle(db, user):
    """Test that users are not admins by default and can be made one."""
    assert user.admin is False
    toggle_admin(db, user)
    assert user.admin is True


def test_microposts_newest_first(db, user):
    """Test that a user's microposts come back newest first."""
    now = datetime.now(UTC)
    older = Micropost(content="Foo bar", user_id=user.id, created_at=now - timedelta(days=1))
    newer = Micropost(content="Baz quux", user_id=user.id, created_at=now - timedelta(hours=1))
    db.add_all([older, newer])
    db.commit()
    db.refresh(user)

    assert [m.id for m in user.microposts] == [newer.id, older.id]


def test_delete_user_destroys_microposts(db, attrs, user):
    """Test that deleting a user removes only their microposts."""
    other = create_user(db, **{**attrs, "email": "other@example.com"})
    db.add_all(
        [
            Micropost(content="one", user_id=user.id),
            Micropost(content="two", user_id=user.id),
            Micropost(content="theirs", user_id=other.id),
        ]
    )
    db.commit()

    delete_user(db, user)

    remaining = db.query(Micropost).all()
    assert [m.content for m in remaining] == ["theirs"]


def test_index_violation_reported_as_validation_error(db, attrs, user, monkeypatch):
    """Test that a duplicate slipping past validation still comes back as a field error."""
    monkeypatch.setattr(user_store, "email_taken", lambda *args, **kwargs: False)

    with pytest.raises(ValidationFailed) as exc_info:
        create_user(db, **{**attrs, "email": "USER@example.com"})

    assert exc_info.value.errors == [FieldError("email", TAKEN)]
    assert db.query(User).count() == 1


@pytest.mark.parametrize("address", ["Ürsula@example.com", "user@exämple.com", "user@foo.\u212a"])
def test_reject_non_ascii_email(db, attrs, address):
    """Test that only ASCII addresses are accepted, so SQL lower() folds them fully."""
    errors = validate_user(db, **{**attrs, "email": address})
    assert [(e.field, e.message) for e in errors] == [("email", "is invalid")]


def test_case_variant_found_in_any_case(db, attrs):
    """Test that a mixed-case address is matched by every case variant."""
    created = create_user(db, **{**attrs, "email": "Mixed.Case@Example.COM"})

    assert get_user_by_email(db, "mixed.case@example.com").id == created.id
    assert error_fields(db, **{**attrs, "email": "MIXED.CASE@EXAMPLE.COM"}) == {"email"}
