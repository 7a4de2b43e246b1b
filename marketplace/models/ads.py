# marketplace/models/ads.py

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from marketplace.database import Base
from marketplace.models.images import Image
from marketplace.models.users import User

def _utcnow():
    return datetime.now(timezone.utc)

class Ad(Base):
    """SQLAlchemy model for the 'ads' table."""
    __tablename__ = "ads"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_ads_price_non_negative"),)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(32), nullable=False)
    price = Column(Integer, nullable=False)
    description = Column(String(64), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    image_id = Column(Integer, ForeignKey("images.id"), nullable=True)

    author = relationship(User, lazy="joined")
    image = relationship(Image, lazy="joined")
