import os
from contextlib import asynccontextmanager

import httpx
import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from city_explorer import db
from city_explorer.api import errors
from city_explorer.api.rate_limit import ClientRateLimiter
from city_explorer.api.routers.healthz import router as healthz_router
from city_explorer.api.routers.location import router as location_router
from city_explorer.api.routers.movies import router as movies_router
from city_explorer.api.routers.readyz import router as readyz_router
from city_explorer.api.routers.weather import router as weather_router
from city_explorer.api.routers.yelp import router as yelp_router
from city_explorer.core.config import reload_settings
from city_explorer.logging import setup_logging
from city_explorer.middleware.request_id import request_id_middleware


def _init_sentry(env: str) -> None:
    # No-op if DSN is missing
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


def create_app() -> FastAPI:
    # Initialize structured logging first
    setup_logging()
    settings = reload_settings()
    if settings.database_url != db.DATABASE_URL:
        db.configure_engine(settings.database_url)
    env = os.getenv("APP_ENV", "dev")
    _init_sentry(env)
    logger = structlog.get_logger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            await db.init_models()
        app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        logger.info("app_startup", env=env, port=settings.port)
        try:
            yield
        finally:
            await app.state.http_client.aclose()
            await db.engine.dispose()
            logger.info("app_shutdown")

    app = FastAPI(title="City Explorer API", lifespan=lifespan)
    app.state.single_flights = {} if settings.dedupe_inflight_fetches else None
    app.state.rate_limiter = (
        ClientRateLimiter(settings.rate_limit) if settings.rate_limit_enabled else None
    )

    # Request-ID middleware (JSON access log)
    app.middleware("http")(request_id_middleware)

    allow_origins = settings.allow_origin_list
    if allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials="*" not in allow_origins,
            allow_methods=["GET", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app)

    app.include_router(location_router)
    app.include_router(weather_router)
    app.include_router(movies_router)
    app.include_router(yelp_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)
    return app


app = create_app()
