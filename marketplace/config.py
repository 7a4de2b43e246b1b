# marketplace/config.py

from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List

load_dotenv()

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./marketplace.db"

    # Logging
    LOG_DIR: str = "logger"
    LOG_LEVEL: str = "INFO"

    # Admin registration
    ADMIN_REGISTRATION_ENABLED: bool = False
    ADMIN_EMAIL_WHITELIST: str = ""

    # Uploaded images
    UPLOAD_DIR: str = "uploads"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def admin_email_whitelist(self) -> List[str]:
        """Splits the comma separated whitelist, dropping blanks."""
        if not self.ADMIN_EMAIL_WHITELIST.strip():
            return []
        return [email.strip() for email in self.ADMIN_EMAIL_WHITELIST.split(",") if email.strip()]

    def is_email_in_whitelist(self, email: str) -> bool:
        return email in self.admin_email_whitelist()

settings = Settings()
