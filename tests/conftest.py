# tests/conftest.py
import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

# ==== 1) Environment before importing the app ====
load_dotenv(".env.test", override=False)
os.environ["APP_ENV"] = "test"
os.environ["SENTRY_DSN"] = ""
# The app-level engine is never used by tests (dependencies are overridden),
# but it must be constructible without a running PostgreSQL.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CREATE_TABLES"] = "0"
os.environ["RATE_LIMIT_ENABLED"] = "0"

from city_explorer import db  # noqa: E402
from city_explorer.api import deps  # noqa: E402
from city_explorer.infra.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from city_explorer.main import create_app  # noqa: E402
from city_explorer.models import Base, Location  # noqa: E402
from city_explorer.repositories.interfaces import LocationRecord  # noqa: E402
from tests.factories.providers import (  # noqa: E402
    FakeBusinessSearch,
    FakeForecasts,
    FakeGeocoder,
    FakeTopRated,
    business_payloads,
    forecast_payloads,
    movie_payloads,
    seattle_geocode_payload,
)


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ==== 2) Engine / Schema (one SQLite file per test) ====
@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    url = f"sqlite+aiosqlite:///{tmp_path / 'city_explorer.db'}"
    eng = db.create_engine(url, poolclass=NullPool)
    _enable_sqlite_foreign_keys(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return db.create_session_factory(engine)


@pytest.fixture
def uow_factory(session_factory):
    return lambda: SqlAlchemyUnitOfWork(session_factory)


@pytest_asyncio.fixture
async def seattle(session_factory) -> LocationRecord:
    """A stored location row other resources can reference."""
    async with session_factory() as session:
        row = Location(
            search_query="Seattle",
            formatted_query="Seattle, WA",
            latitude=47.6,
            longitude=-122.3,
        )
        session.add(row)
        await session.commit()
        return LocationRecord(
            id=row.id,
            search_query=row.search_query,
            formatted_query=row.formatted_query,
            latitude=row.latitude,
            longitude=row.longitude,
        )


# ==== 3) Provider fakes ====
@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder([seattle_geocode_payload()])


@pytest.fixture
def forecasts() -> FakeForecasts:
    return FakeForecasts(forecast_payloads())


@pytest.fixture
def top_rated() -> FakeTopRated:
    return FakeTopRated(movie_payloads())


@pytest.fixture
def business_search() -> FakeBusinessSearch:
    return FakeBusinessSearch(business_payloads())


# ==== 4) FastAPI app wired to the test store and fakes ====
@pytest.fixture
def make_app(session_factory, geocoder, forecasts, top_rated, business_search):
    """Build an app from the current environment, wired to the test store and fakes."""

    def _make():
        application = create_app()
        overrides = application.dependency_overrides
        overrides[deps.get_session_factory] = lambda: session_factory
        overrides[deps.get_geocoder] = lambda: geocoder
        overrides[deps.get_forecast_source] = lambda: forecasts
        overrides[deps.get_movie_source] = lambda: top_rated
        overrides[deps.get_business_search] = lambda: business_search
        return application

    return _make


@pytest.fixture
def app(make_app):
    application = make_app()
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def app_client(app) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
