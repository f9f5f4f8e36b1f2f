"""Runtime settings for the storefront.

Settings are read once at startup into an immutable object and handed to the
services that need them; nothing below reads the environment on its own.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

_TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    api_prefix: str = "/api"
    cors_origins: tuple[str, ...] = (
        "http://localhost:5173",
        "http://localhost:4173",
        "http://localhost:5174",
    )

    jwt_secret: str = "dev-only-secret-change-me-0123456789abcdef"
    token_ttl_seconds: int = 60 * 60 * 24
    bcrypt_rounds: int = 10

    admin_email: str | None = None
    admin_password: str | None = field(default=None, repr=False)

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = field(default=None, repr=False)
    email_sender: str | None = None

    gemini_api_key: str | None = field(default=None, repr=False)
    gemini_model: str = "gemini-2.0-flash"
    recipe_max_attempts: int = 3
    recipe_retry_base_delay: float = 2.0

    media_dir: str = "media"
    media_base_url: str = "/media"

    enforce_order_total: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment in ("production", "staging")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()

        origins = env.get("CORS_ORIGINS")
        cors_origins = (
            tuple(o.strip() for o in origins.split(",") if o.strip()) if origins else defaults.cors_origins
        )

        return cls(
            environment=(env.get("ENVIRONMENT") or env.get("PROTEAN_ENV") or defaults.environment).lower(),
            api_prefix=env.get("API_PREFIX", defaults.api_prefix),
            cors_origins=cors_origins,
            jwt_secret=env.get("JWT_SECRET", defaults.jwt_secret),
            token_ttl_seconds=int(env.get("TOKEN_TTL_SECONDS", defaults.token_ttl_seconds)),
            bcrypt_rounds=int(env.get("BCRYPT_ROUNDS", defaults.bcrypt_rounds)),
            admin_email=env.get("ADMIN_EMAIL"),
            admin_password=env.get("ADMIN_PASSWORD"),
            smtp_host=env.get("SMTP_HOST", defaults.smtp_host),
            smtp_port=int(env.get("SMTP_PORT", defaults.smtp_port)),
            smtp_user=env.get("EMAIL_USER"),
            smtp_password=env.get("EMAIL_PASSWORD"),
            email_sender=env.get("EMAIL_SENDER") or env.get("EMAIL_USER"),
            gemini_api_key=env.get("GEMINI_KEY"),
            gemini_model=env.get("GEMINI_MODEL", defaults.gemini_model),
            recipe_max_attempts=int(env.get("RECIPE_MAX_ATTEMPTS", defaults.recipe_max_attempts)),
            recipe_retry_base_delay=float(env.get("RECIPE_RETRY_BASE_DELAY", defaults.recipe_retry_base_delay)),
            media_dir=env.get("MEDIA_DIR", defaults.media_dir),
            media_base_url=env.get("MEDIA_BASE_URL", defaults.media_base_url),
            enforce_order_total=_as_bool(env.get("ENFORCE_ORDER_TOTAL"), defaults.enforce_order_total),
        )
