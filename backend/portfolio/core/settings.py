# portfolio/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    api_title: str = Field(default="Portfolio", alias="API_TITLE")

    # Mail account used to deliver contact notifications
    email_user: Optional[str] = Field(default=None, alias="EMAIL_USER")
    email_pass: Optional[str] = Field(default=None, alias="EMAIL_PASS")
    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=465, alias="SMTP_PORT")
    smtp_timeout_seconds: float = Field(default=10.0, alias="SMTP_TIMEOUT_SECONDS")

    # Contact form limiter: attempts per client address per window
    contact_rate_window_seconds: int = Field(default=15 * 60, alias="CONTACT_RATE_WINDOW_SECONDS")
    contact_rate_max: int = Field(default=5, alias="CONTACT_RATE_MAX")
    contact_rate_max_clients: int = Field(default=10_000, alias="CONTACT_RATE_MAX_CLIENTS")

    # Only enable behind a proxy that sets X-Forwarded-For
    trust_proxy_headers: bool = Field(default=False, alias="TRUST_PROXY_HEADERS")

    # If unset we use the copies packaged next to the code
    profile_path: Optional[str] = Field(default=None, alias="PROFILE_PATH")
    static_root: Optional[str] = Field(default=None, alias="STATIC_ROOT")

    dist_dir: str = Field(default="dist", alias="DIST_DIR")

settings = Settings()
