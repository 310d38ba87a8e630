"""Food Order API — configuration loaded from environment."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./food_order.db"
    database_echo: bool = False
    database_pool_size: int = 5
    database_connect_timeout: int = 30

    # ── SMTP (outbound email) ─────────────────────────────
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_start_tls: bool = True
    email_from: str = "no-reply@foodorder.local"

    # ── One-time passwords ────────────────────────────────
    otp_ttl_seconds: int = 600
    otp_max_attempts: int = 3
    otp_length: int = 6
    otp_allow_leading_zero: bool = False

    # ── App ───────────────────────────────────────────────
    app_name: str = "Food Order API"
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton settings instance
settings = Settings()
