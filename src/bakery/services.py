"""Adapters and helpers the HTTP layer depends on, built once per app."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from bakery.catalogue.images.local_adapter import LocalImageStore
from bakery.catalogue.images.port import ImageStore
from bakery.identity.passwords import PasswordHasher
from bakery.identity.tokens import TokenIssuer
from bakery.notifications.email_port import EmailPort
from bakery.notifications.fake_email import FakeEmailAdapter
from bakery.notifications.smtp_email import SmtpEmailAdapter
from bakery.recipes.generator.gemini_adapter import GeminiRecipeGenerator
from bakery.recipes.generator.port import RecipeGenerator
from bakery.settings import Settings

logger = structlog.get_logger(__name__)


@dataclass
class Services:
    settings: Settings
    tokens: TokenIssuer
    passwords: PasswordHasher
    email: EmailPort
    images: ImageStore
    recipes: RecipeGenerator
    sleep: Callable[[float], None] = field(default=time.sleep)


def build_email(settings: Settings) -> EmailPort:
    if settings.smtp_user and settings.smtp_password:
        return SmtpEmailAdapter(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            sender=settings.email_sender,
        )

    if settings.is_production:
        raise RuntimeError("EMAIL_USER and EMAIL_PASSWORD must be set in production")

    logger.warning("SMTP credentials missing, invoices will be kept in memory")
    return FakeEmailAdapter()


def build_services(settings: Settings) -> Services:
    return Services(
        settings=settings,
        tokens=TokenIssuer(settings.jwt_secret, settings.token_ttl_seconds),
        passwords=PasswordHasher(settings.bcrypt_rounds),
        email=build_email(settings),
        images=LocalImageStore(settings.media_dir, settings.media_base_url),
        recipes=GeminiRecipeGenerator(settings.gemini_api_key, settings.gemini_model),
    )
