"""Test config and shared fixtures."""
import pytest
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

from apps.models import Course, Enrollment
from apps.catalog.api.router import router as catalog_router
from datasources.dependencies import get_mysql_repository
from datasources.exceptions.handler import register_exception_handlers
from datasources.middleware.logging_md import LoggingMiddleware
from datasources.mongo import MongoRepository
from datasources.mysql import MySQLRepository


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine with every SQLModel table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def mysql_repository(engine: AsyncEngine) -> MySQLRepository:
    return MySQLRepository(engine)


@pytest.fixture
async def seeded_courses(engine: AsyncEngine) -> int:
    """Insert 50 courses: odd numbers are "math", even numbers are "art"."""
    rows = [
        {
            "code": f"C{i:03d}",
            "title": f"Course {i}",
            "category": "math" if i % 2 else "art",
            "seats": 10,
        }
        for i in range(1, 51)
    ]
    async with engine.begin() as conn:
        await conn.execute(Course.__table__.insert(), rows)
    return len(rows)


@pytest.fixture
def mongo_cursor() -> MagicMock:
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    cursor.close = AsyncMock()
    return cursor


@pytest.fixture
def mongo_collection(mongo_cursor: MagicMock) -> MagicMock:
    """Motor collection double; results use the attribute names motor returns."""
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.find = MagicMock(return_value=mongo_cursor)
    collection.count_documents = AsyncMock(return_value=0)
    collection.update_one = AsyncMock(
        return_value=SimpleNamespace(acknowledged=True, matched_count=1, modified_count=1)
    )
    collection.insert_one = AsyncMock(
        return_value=SimpleNamespace(acknowledged=True, inserted_id="65f0c0ffee")
    )
    collection.delete_one = AsyncMock(
        return_value=SimpleNamespace(acknowledged=True, deleted_count=1)
    )
    return collection


@pytest.fixture
def mongo_session() -> MagicMock:
    session = MagicMock()
    session.start_transaction = MagicMock()
    session.commit_transaction = AsyncMock()
    session.abort_transaction = AsyncMock()
    session.end_session = AsyncMock()
    return session


@pytest.fixture
def mongo_database(mongo_collection: MagicMock, mongo_session: MagicMock) -> MagicMock:
    database = MagicMock()
    database.__getitem__.return_value = mongo_collection
    database.client.start_session = AsyncMock(return_value=mongo_session)
    return database


@pytest.fixture
def mongo_repository(mongo_database: MagicMock) -> MongoRepository:
    return MongoRepository(mongo_database)


@pytest.fixture
def app(mysql_repository: MySQLRepository) -> FastAPI:
    """Catalog app wired to the SQLite-backed repository."""
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(LoggingMiddleware)
    app.include_router(catalog_router, prefix="/api/v1/catalog")
    app.dependency_overrides[get_mysql_repository] = lambda: mysql_repository
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
