"""Bakery storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 4000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from bakery/domain.toml:
#   - unset / "test" -> in-memory repositories
#   - "production"   -> PostgreSQL via DATABASE_URL
from bakery.domain import bakery
from bakery.services import build_services
from bakery.settings import Settings
from bakery.web import create_app

bakery.init()

settings = Settings.from_env()
app = create_app(build_services(settings))
