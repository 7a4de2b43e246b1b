# marketplace/schemas/user_schemas.py

from pydantic import BaseModel, Field, field_validator
from pydantic.networks import validate_email
from pydantic.alias_generators import to_camel
from typing import Optional

from marketplace.models.users import UserRole

PHONE_PATTERN = r"^\+7\s?\(?\d{3}\)?\s?\d{3}-?\d{2}-?\d{2}$"

class CamelModel(BaseModel):
    """Accepts both snake_case attribute names and camelCase wire names."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class Login(CamelModel):
    """Schema for user login request body."""
    username: str
    password: str

class Register(CamelModel):
    """
    Schema for the registration request body.

    The username must be a syntactically valid email but is kept exactly as
    typed, because it is the login key and is matched against the admin
    whitelist verbatim.
    """
    username: str = Field(min_length=4, max_length=32)
    password: str = Field(min_length=8, max_length=16)
    first_name: str = Field(min_length=2, max_length=16)
    last_name: str = Field(min_length=2, max_length=16)
    phone: str = Field(pattern=PHONE_PATTERN)
    role: Optional[UserRole] = None

    @field_validator("username")
    @classmethod
    def username_is_email(cls, value: str) -> str:
        validate_email(value)
        return value

class UserView(CamelModel):
    """User profile as returned to clients. Never carries the password hash."""
    id: int
    email: str
    first_name: str
    last_name: str
    phone: str
    role: UserRole
    image: Optional[str] = None

class UpdateUser(CamelModel):
    """Partial profile update; absent fields are left untouched."""
    first_name: Optional[str] = Field(default=None, min_length=2, max_length=16)
    last_name: Optional[str] = Field(default=None, min_length=2, max_length=16)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)

class NewPassword(CamelModel):
    current_password: str
    new_password: str = Field(min_length=8, max_length=16)
