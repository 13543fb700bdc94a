"""
PourCost API

Serves the pricing, unit and currency engines over HTTP.
Run with: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import get_settings
from api.middleware.errors import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.routers import currency, health, pricing, units

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# (router, prefix, tag); health stays at the root for probes
ROUTES = (
    (health.router, "", "Health"),
    (pricing.router, "/api/v1/pricing", "Pricing"),
    (units.router, "/api/v1/units", "Units"),
    (currency.router, "/api/v1/currency", "Currency"),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        f"{settings.app_name} {settings.app_version} ready: "
        f"goal {settings.default_pour_cost_goal:g}% "
        f"(cocktails {settings.default_cocktail_goal:g}%), "
        f"{settings.base_currency}, {settings.measurement_system.value} units, {settings.locale}"
    )
    yield
    logger.info(f"{settings.app_name} stopped")


def create_app() -> FastAPI:
    """Build the API from environment settings."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Pour cost, pricing and measurement conversion API for bars",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    setup_exception_handlers(app)

    for router, prefix, tag in ROUTES:
        app.include_router(router, prefix=prefix, tags=[tag])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("api.main:app", host=settings.host, port=settings.port, reload=settings.debug)
