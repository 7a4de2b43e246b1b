# marketplace/models/images.py

from sqlalchemy import Column, Integer, String, BigInteger, CheckConstraint
from marketplace.database import Base

class Image(Base):
    """SQLAlchemy model for the 'images' table. Only the file reference is stored."""
    __tablename__ = "images"
    __table_args__ = (CheckConstraint("file_size > 0", name="ck_images_file_size_positive"),)

    id = Column(Integer, primary_key=True, index=True)
    file_path = Column(String(255), unique=True, nullable=False)
    file_size = Column(BigInteger, nullable=False)
    media_type = Column(String(50), nullable=False)

    @property
    def image_url(self):
        if not self.file_path:
            return None
        return "/images/" + self.file_path.replace("\\", "/")
