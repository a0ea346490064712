import pytest

from codemaster.config import settings
from codemaster.core.exceptions import (
    AccountLockedError,
    AuthorizationError,
    InvalidCredentialsError,
    ResourceAlreadyExistsError,
)
from codemaster.models.ledger import PointEvent
from codemaster.models.user import User
from codemaster.schemas.user import UserRole, UserSignup
from codemaster.services.user_service import UserService, user_service


def _signup(db, username="alice", email="alice@example.com", password="secret1", role=None):
    return user_service.create_user(
        db,
        UserSignup(username=username, email=email, password=password, role=role),
    )


def test_signup_starts_at_zero_points(db):
    user = _signup(db)
    assert user.points == 0
    assert user.role == "user"
    assert user.password_hash != "secret1"


def test_signup_normalizes_email(db):
    user = _signup(db, email="Alice@Example.COM")
    assert user.email == "alice@example.com"


def test_duplicate_email_or_username_conflicts(db):
    _signup(db)
    with pytest.raises(ResourceAlreadyExistsError):
        _signup(db, username="alice2")
    with pytest.raises(ResourceAlreadyExistsError):
        _signup(db, username="ALICE", email="other@example.com")


def test_signup_losing_a_race_conflicts(db, monkeypatch):
    _signup(db)
    # Skip the pre-check so the unique constraints decide, as under concurrent signups
    monkeypatch.setattr(UserService, "_ensure_available", staticmethod(lambda *args: None))

    with pytest.raises(ResourceAlreadyExistsError):
        _signup(db, username="alice2")
    with pytest.raises(ResourceAlreadyExistsError):
        _signup(db, email="second@example.com")

    assert db.query(User).count() == 1
    assert _signup(db, username="bob", email="bob@example.com").id is not None


def test_signup_cannot_self_assign_admin(db, monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_ADMIN_SIGNUP", False)
    with pytest.raises(AuthorizationError) as exc_info:
        _signup(db, role=UserRole.ADMIN)
    assert "ALLOW_ADMIN_SIGNUP" in exc_info.value.message
    assert db.query(User).count() == 0


def test_signup_as_admin_when_enabled(db, monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_ADMIN_SIGNUP", True)
    user = _signup(db, role=UserRole.ADMIN)
    assert user.role == "admin"


def test_login_records_history(db):
    _signup(db)

    user = user_service.authenticate_user(db, "alice@example.com", "secret1", ip_address="10.0.0.1")
    user_service.authenticate_user(db, "alice@example.com", "secret1", ip_address="10.0.0.2")

    assert user.last_login is not None
    profile = user_service.get_profile(db, user.id)
    assert len(profile["login_history"]) == 2
    assert profile["solved_count"] == 0
    assert profile["inventory"] == []


def test_wrong_password_and_unknown_email(db):
    _signup(db)
    with pytest.raises(InvalidCredentialsError):
        user_service.authenticate_user(db, "alice@example.com", "nope")
    with pytest.raises(InvalidCredentialsError):
        user_service.authenticate_user(db, "nobody@example.com", "secret1")


def test_lockout_after_repeated_failures(db):
    _signup(db)
    for _ in range(user_service.MAX_FAILED_ATTEMPTS - 1):
        with pytest.raises(InvalidCredentialsError):
            user_service.authenticate_user(db, "alice@example.com", "bad")

    with pytest.raises(AccountLockedError):
        user_service.authenticate_user(db, "alice@example.com", "bad")
    with pytest.raises(AccountLockedError):
        user_service.authenticate_user(db, "alice@example.com", "secret1")


def test_ensure_admin_is_idempotent(db):
    admin = user_service.ensure_admin(db)
    again = user_service.ensure_admin(db)

    assert admin.id == again.id
    assert admin.role == "admin"
    assert admin.points == settings.ADMIN_INITIAL_POINTS
    assert db.query(PointEvent).filter(PointEvent.reason == "admin_bootstrap").count() == 1
