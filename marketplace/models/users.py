# marketplace/models/users.py

import enum
from sqlalchemy import Column, Integer, String, Enum, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from marketplace.database import Base
from marketplace.models.images import Image

class UserRole(str, enum.Enum):
    """Enumeration for user roles."""
    USER = "USER"
    ADMIN = "ADMIN"

class User(Base):
    """SQLAlchemy model for the 'users' table."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(32), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String(16), nullable=False)
    last_name = Column(String(16), nullable=False)
    phone = Column(String(20), nullable=False)
    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False)
    enabled = Column(Boolean, default=True, nullable=False)
    image_id = Column(Integer, ForeignKey("images.id"), nullable=True)

    image = relationship(Image, lazy="joined")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
