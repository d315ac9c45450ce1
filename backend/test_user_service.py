import pytest

from movier.core.auth import decode_access_token
from movier.core.exceptions import ConflictError, InvalidCredentialsError, ValidationError
from movier.models import User
from movier.services.user_service import UserService


def test_register_normalizes_and_issues_token(db):
    result = UserService(db).register(" alice ", " Alice@Example.com ", "secret1")

    assert result.user.username == "alice"
    assert result.user.email == "alice@example.com"
    payload = decode_access_token(result.token)
    assert payload["sub"] == str(result.user.id)
    assert payload["username"] == "alice"
    assert db.query(User).one().password_hash != "secret1"


@pytest.mark.parametrize("username, email, password", [
    ("", "a@example.com", "secret1"),
    ("alice", "", "secret1"),
    ("alice", "a@example.com", ""),
    ("alice", "a@example.com", "short"),
])
def test_register_validates_input(db, username, email, password):
    with pytest.raises(ValidationError):
        UserService(db).register(username, email, password)


def test_duplicate_username_or_email_conflicts(db):
    service = UserService(db)
    service.register("alice", "alice@example.com", "secret1")

    with pytest.raises(ConflictError):
        service.register("alice", "other@example.com", "secret1")
    with pytest.raises(ConflictError):
        service.register("bob", "ALICE@example.com", "secret1")


def test_registration_race_is_a_conflict(db, monkeypatch):
    service = UserService(db)
    service.register("alice", "alice@example.com", "secret1")
    monkeypatch.setattr(service.user_repository, "username_or_email_exists", lambda username, email: False)

    with pytest.raises(ConflictError):
        service.register("alice", "alice2@example.com", "secret1")

    assert db.query(User).count() == 1


def test_login_by_username_or_email(db):
    service = UserService(db)
    registered = service.register("alice", "alice@example.com", "secret1")

    assert service.login("alice", "secret1").user.id == registered.user.id
    assert service.login("alice@example.com", "secret1").user.id == registered.user.id

    with pytest.raises(InvalidCredentialsError):
        service.login("alice", "wrong-password")
    with pytest.raises(InvalidCredentialsError):
        service.login("nobody", "secret1")
