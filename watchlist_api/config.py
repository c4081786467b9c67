"""Configuration management using pydantic-settings."""

from flask import current_app
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at startup by ``create_app()`` and stored on the Flask app.
    Request handlers read it with ``current_settings()``; service and token
    functions receive it as an explicit argument.
    """

    database_url: str = "sqlite:///./data/watchlist.db"
    port: int = 3000
    cors_origins: list[str] = ["http://localhost:3000"]

    # JWT Configuration
    # IT IS NOT A GOOD IDEA TO KEEP THE DEFAULT SECRET, set JWT_SECRET in .env
    jwt_secret: str = "secret"
    jwt_expiry_days: int = 7

    # Bcrypt work factor (tests use 4 for faster execution)
    bcrypt_work_factor: int = 10

    # Password policy
    password_regex: str = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$"
    password_regex_error_message: str = (
        "Password must contain at least 8 characters, including a lowercase letter, "
        "an uppercase letter, a number, and a special character (@$!%*?&)."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


SETTINGS_KEY = "WATCHLIST_SETTINGS"


def current_settings() -> Settings:
    """Return the Settings instance bound to the running app."""
    return current_app.config[SETTINGS_KEY]
