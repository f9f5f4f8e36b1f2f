"""FastAPI application factory.

Every request runs inside the bakery domain context; routers are mounted
under the configured API prefix.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from bakery.catalogue.api.routes import router as product_router
from bakery.domain import bakery
from bakery.errors import register_error_handlers
from bakery.identity.api.routes import router as user_router
from bakery.ordering.api.routes import cart_router, order_router
from bakery.recipes.api.routes import router as recipe_router
from bakery.services import Services


def create_app(services: Services) -> FastAPI:
    settings = services.settings

    app = FastAPI(
        title="Bakery Storefront API",
        description="Catalog, cart, checkout, invoices and recipe suggestions",
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        with bakery.domain_context():
            response = await call_next(request)
        return response

    register_error_handlers(app, expose_tracebacks=not settings.is_production)

    for router in (user_router, product_router, cart_router, order_router, recipe_router):
        app.include_router(router, prefix=settings.api_prefix)

    # Uploaded images are served locally unless they live behind an external URL
    if settings.media_base_url.startswith("/"):
        app.mount(
            settings.media_base_url,
            StaticFiles(directory=settings.media_dir, check_dir=False),
            name="media",
        )

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": bakery.name})

    return app
