import os

# keep the app's module-level engine off Postgres while the suite runs
os.environ.setdefault("DATABASE_ASYNC_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, get_async_db
from main import app
from models import Difficulty, Region, Tour, TourPackage


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_async_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_get_async_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def tour(db):
    db.add(TourPackage(code="BC", name="Backpack Cal"))
    big_sur = Tour(
        id=1,
        title="Big Sur Retreat",
        description="Redwoods and rugged coast",
        price=750,
        duration="3 days",
        tour_package_code="BC",
        difficulty=Difficulty.Medium,
        region=Region.Central_Coast,
    )
    db.add(big_sur)
    await db.commit()
    return big_sur
