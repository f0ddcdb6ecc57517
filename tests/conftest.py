import os

# catalog.main builds a module-level app on import; keep it off Postgres
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./.pytest_catalog.db")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import text

from catalog.core.config import Settings
from catalog.core.database import init_models
from catalog.main import create_app
from catalog.services.catalog import EventService, PropertyService
from catalog.services.tracking_plans import TrackingPlanService

CATALOG_TABLES = (
    "events",
    "properties",
    "tracking_plans",
    "tracking_plan_events",
    "tracking_plan_event_properties",
)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")


@pytest_asyncio.fixture
async def app(settings):
    app = create_app(settings)
    await init_models(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def uow_factory(app):
    return app.state.uow_factory


@pytest.fixture
def plan_service(uow_factory) -> TrackingPlanService:
    return TrackingPlanService(uow_factory)


@pytest.fixture
def event_service(uow_factory) -> EventService:
    return EventService(uow_factory)


@pytest.fixture
def property_service(uow_factory) -> PropertyService:
    return PropertyService(uow_factory)


@pytest.fixture
def count_rows(app):
    """Count rows straight from the tables, bypassing the ORM"""

    async def count(table: str) -> int:
        async with app.state.engine.connect() as conn:
            result = await conn.execute(text(f"SELECT COUNT(*) FROM {table}"))
            return result.scalar_one()

    return count


@pytest.fixture
def snapshot_counts(count_rows):
    async def snapshot() -> dict[str, int]:
        return {table: await count_rows(table) for table in CATALOG_TABLES}

    return snapshot
