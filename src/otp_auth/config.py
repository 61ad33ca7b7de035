"""OTP Auth — configuration loaded from environment."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── One-time passwords ────────────────────────────────
    otp_length: int = 6
    otp_ttl_seconds: int = 60
    otp_max_attempts: int = 3

    # ── Countdown ─────────────────────────────────────────
    countdown_interval_seconds: float = 1.0

    # ── App ───────────────────────────────────────────────
    app_name: str = "OTP Auth"
    debug: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "OTP_AUTH_",
    }


# Singleton settings instance
settings = Settings()
