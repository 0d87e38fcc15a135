# app/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    api_title: str = Field(default="Contact Relay API", alias="API_TITLE")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # Outbound mail account
    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=465, alias="SMTP_PORT")
    smtp_timeout: float = Field(default=60.0, alias="SMTP_TIMEOUT")
    user_email: Optional[str] = Field(default=None, alias="USER_EMAIL")
    user_password: Optional[str] = Field(default=None, alias="USER_PASSWORD")

    # Envelope sender shown next to the submitter's name; falls back to USER_EMAIL
    from_email: Optional[str] = Field(default=None, alias="FROM_EMAIL")

    # Comma-separated list of admin recipients
    to_emails: Optional[str] = Field(default=None, alias="TO_EMAILS")

    # Answer every outcome with 200 like the old frontend expects
    legacy_status_codes: bool = Field(default=False, alias="LEGACY_STATUS_CODES")

    @property
    def recipients(self) -> List[str]:
        if not self.to_emails:
            return []
        return [e.strip() for e in self.to_emails.split(",") if e.strip()]

settings = Settings()
