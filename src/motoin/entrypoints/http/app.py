from fastapi import FastAPI

from motoin.adapters.in_memory_token_blacklist import InMemoryTokenBlacklist
from motoin.entrypoints.http.exception_handlers import register_exception_handlers
from motoin.entrypoints.http.routes.auth import router as auth_router
from motoin.entrypoints.http.routes.catalog import admin_router as catalog_admin_router
from motoin.entrypoints.http.routes.catalog import router as catalog_router
from motoin.entrypoints.http.routes.health import router as health_router
from motoin.entrypoints.http.routes.orders import router as orders_router
from motoin.entrypoints.http.routes.products import router as products_router
from motoin.entrypoints.http.routes.settings import router as settings_router
from motoin.entrypoints.http.routes.tickets import router as tickets_router
from motoin.infra.logging_config import configure_logging


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="MotoIn API",
        description="""
        Backend for a motorcycle parts shop.

        ## Features
        - Motorcycle compatibility lookups (makes, displacements, models, years)
        - Catalog import with de-duplication on normalized make + model
        - Product listing and search
        - Customer accounts, orders and support tickets

        ## Authentication
        `Authorization: Bearer <token>` with a token from `/v1/auth/login`.
        Catalog management, user management and most write operations
        require an admin account.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        contact={
            "name": "MotoIn Team",
            "email": "dev@motoin.it",
        },
        license_info={
            "name": "Proprietary",
        },
    )

    # Revoked tokens, kept per application instance
    app.state.token_blacklist = InMemoryTokenBlacklist()

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(catalog_router, prefix="/v1")
    app.include_router(catalog_admin_router, prefix="/v1")
    app.include_router(products_router, prefix="/v1")
    app.include_router(auth_router, prefix="/v1")
    app.include_router(orders_router, prefix="/v1")
    app.include_router(tickets_router, prefix="/v1")
    app.include_router(settings_router, prefix="/v1")

    return app


app = build_app()
