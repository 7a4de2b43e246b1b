"""
Name: Registration Service Tests

Responsibilities:
  - Fresh identifiers register once, enabled, with a hashed secret
  - Duplicates are reported as False and leave the existing record alone
  - Role defaults to USER; ADMIN only through the whitelist
"""

from unittest.mock import patch

import pytest

from marketplace.models.users import User, UserRole
from marketplace.repositories.user_store import InMemoryUserStore, SqlAlchemyUserStore
from marketplace.schemas.user_schemas import Register
from marketplace.services.registration import RegistrationService


pytestmark = pytest.mark.unit


@pytest.fixture(params=["memory", "sqlalchemy"])
def user_store(request, db):
    if request.param == "memory":
        return InMemoryUserStore()
    return SqlAlchemyUserStore(db)


@pytest.fixture
def service(user_store, hasher, settings):
    return RegistrationService(user_store, hasher, settings)


def _register(email, role=None):
    return Register(
        username=email,
        password="password123",
        first_name="Petr",
        last_name="Petrov",
        phone="+7 (912) 555-12-34",
        role=role,
    )


def test_register_fresh_identifier(service, user_store, hasher, register_request):
    assert service.register(register_request) is True

    user = user_store.find_by_email("a@b.com")
    assert user is not None
    assert user.id is not None
    assert user.enabled is True
    assert user.role == UserRole.USER
    assert user.first_name == "Ivan"
    assert user.last_name == "Ivanov"
    assert user.phone == "+7 999 123-45-67"
    assert user.hashed_password != "password123"
    assert hasher.verify("password123", user.hashed_password)


def test_register_twice_returns_false_and_keeps_record(service, user_store, register_request):
    assert service.register(register_request) is True
    original = user_store.find_by_email("a@b.com")
    original_hash = original.hashed_password

    second = register_request.model_copy(update={"password": "other-pass1", "first_name": "Oleg"})
    assert service.register(second) is False

    user = user_store.find_by_email("a@b.com")
    assert user.id == original.id
    assert user.hashed_password == original_hash
    assert user.first_name == "Ivan"


def test_register_twice_stores_single_row(db, hasher, settings, register_request):
    service = RegistrationService(SqlAlchemyUserStore(db), hasher, settings)

    assert service.register(register_request) is True
    assert service.register(register_request) is False
    assert db.query(User).filter(User.email == "a@b.com").count() == 1


def test_in_memory_store_holds_single_record(hasher, settings, register_request):
    store = InMemoryUserStore()
    service = RegistrationService(store, hasher, settings)

    service.register(register_request)
    service.register(register_request)

    assert store.count() == 1


@pytest.mark.parametrize("password", ["password123", "12345678", "sixteen-chars-pw"])
def test_secret_is_never_stored_in_plaintext(service, user_store, password):
    request = _register("plain@example.com").model_copy(update={"password": password})

    assert service.register(request) is True
    assert user_store.find_by_email("plain@example.com").hashed_password != password


def test_explicit_user_role_kept(service, user_store):
    assert service.register(_register("someone@example.com", UserRole.USER)) is True
    assert user_store.find_by_email("someone@example.com").role == UserRole.USER


def test_admin_role_granted_to_whitelisted_email(service, user_store):
    assert service.register(_register("boss@example.com", UserRole.ADMIN)) is True
    assert user_store.find_by_email("boss@example.com").role == UserRole.ADMIN


def test_admin_role_downgraded_for_unlisted_email(service, user_store):
    assert service.register(_register("intruder@example.com", UserRole.ADMIN)) is True
    assert user_store.find_by_email("intruder@example.com").role == UserRole.USER


def test_admin_role_downgraded_when_admin_registration_disabled(hasher, settings):
    settings.ADMIN_REGISTRATION_ENABLED = False
    store = InMemoryUserStore()
    service = RegistrationService(store, hasher, settings)

    assert service.register(_register("boss@example.com", UserRole.ADMIN)) is True
    assert store.find_by_email("boss@example.com").role == UserRole.USER


def test_store_level_duplicate_is_reported_as_false(db, hasher, settings, make_user, register_request):
    make_user(email="a@b.com")
    store = SqlAlchemyUserStore(db)
    service = RegistrationService(store, hasher, settings)

    # Simulates a concurrent registration that slipped past the existence check
    with patch.object(store, "exists_by_email", return_value=False):
        assert service.register(register_request) is False

    assert db.query(User).filter(User.email == "a@b.com").count() == 1


def test_store_failure_propagates(hasher, settings, register_request):
    store = InMemoryUserStore()
    service = RegistrationService(store, hasher, settings)

    with patch.object(store, "save", side_effect=RuntimeError("storage unavailable")):
        with pytest.raises(RuntimeError, match="storage unavailable"):
            service.register(register_request)


def test_identifier_stored_as_submitted(service, user_store, settings):
    settings.ADMIN_EMAIL_WHITELIST = "Boss@Example.com"

    assert service.register(_register("Boss@Example.com", UserRole.ADMIN)) is True

    user = user_store.find_by_email("Boss@Example.com")
    assert user.email == "Boss@Example.com"
    assert user.role == UserRole.ADMIN
