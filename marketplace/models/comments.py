# marketplace/models/comments.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from marketplace.database import Base
from marketplace.models.ads import Ad, _utcnow
from marketplace.models.users import User

class Comment(Base):
    """SQLAlchemy model for the 'comments' table."""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(String(64), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    ad_id = Column(Integer, ForeignKey("ads.id"), index=True, nullable=False)

    author = relationship(User, lazy="joined")
    ad = relationship(Ad)
