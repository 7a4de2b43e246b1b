"""
Shared fixtures: an in-memory SQLite database per test and a low-cost
Argon2 hasher so hashing does not dominate the run time, plus an
upload directory under tmp_path for image tests.
"""

import io

import pytest
from argon2 import PasswordHasher
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.auth import CredentialHasher
from marketplace.config import Settings
from marketplace.database import Base
from marketplace.main import init_app
from marketplace.models.users import User, UserRole
from marketplace.schemas.user_schemas import Register
from marketplace.services.image_service import ImageService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_app(bind=engine, configure_logging=False)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher():
    return CredentialHasher(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
def settings():
    return Settings(
        ADMIN_REGISTRATION_ENABLED=True,
        ADMIN_EMAIL_WHITELIST="boss@example.com, chief@example.com",
    )


@pytest.fixture
def register_request():
    return Register(
        username="a@b.com",
        password="password123",
        first_name="Ivan",
        last_name="Ivanov",
        phone="+7 999 123-45-67",
    )


@pytest.fixture
def make_user(db, hasher):
    """Inserts a user directly and returns it."""

    def _make_user(email="user@example.com", password="password123",
                   role=UserRole.USER, first_name="Ivan", enabled=True):
        user = User(
            email=email,
            hashed_password=hasher.hash(password),
            first_name=first_name,
            last_name="Ivanov",
            phone="+7 999 123-45-67",
            role=role,
            enabled=enabled,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def images(tmp_path):
    return ImageService(upload_dir=str(tmp_path / "uploads"))


def image_bytes(size=(400, 200), mode="RGB", color="red", image_format="PNG"):
    """Encodes a solid-colour image in memory."""
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return image_bytes()


@pytest.fixture
def make_image():
    return image_bytes
