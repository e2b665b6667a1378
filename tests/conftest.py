"""Pytest configuration and fixtures."""

from typing import List, Sequence

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from reading_plan.config import DatabaseSettings, OutputSettings, PlannerSettings, Settings
from reading_plan.database.models import Base, BibleVerse
from reading_plan.database.session import get_session
from reading_plan.models.unit import Partition, Unit

# Test database URL (in-memory SQLite for unit tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# (idx, book, chapter, long_label, countOfChapter) - one row per verse
VERSE_ROWS = [
    (1, 1, 1, "Genesis", 300),
    (2, 1, 1, "Genesis", 300),
    (3, 1, 1, "Genesis", 300),
    (4, 1, 2, "Genesis", 200),
    (5, 1, 2, "Genesis", 200),
    (6, 2, 1, "Exodus", 250),
    (7, 2, 1, "Exodus", 250),
    (8, 2, 2, "Exodus", 250),
    (9, 8, 1, "Ruth", 100),
    (10, 8, 1, "Ruth", 100),
    (11, 8, 2, "Ruth", 400),
]


def make_units(sizes: Sequence[int], label: str = "Book") -> List[Unit]:
    """Build consecutive units with the given sizes, chapters numbered from 1."""
    return [
        Unit(sequence_index=i * 10, label=label, group_label=i + 1, size=size)
        for i, size in enumerate(sizes)
    ]


def assert_covers(partition: Partition, units: Sequence[Unit]) -> None:
    """Check that groups are contiguous, non-overlapping and cover every unit once."""
    assert partition.group_count >= 1
    position = {unit.sequence_index: i for i, unit in enumerate(units)}

    expected_start = 0
    for group in partition.groups:
        start = position[group.start_unit.sequence_index]
        end = position[group.end_unit.sequence_index]
        assert start == expected_start
        assert start <= end
        assert group.accumulated_size == sum(u.size for u in units[start : end + 1])
        expected_start = end + 1

    assert expected_start == len(units)
    assert partition.groups[0].start_unit == units[0]
    assert partition.groups[-1].end_unit == units[-1]


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at an in-memory database and a temporary output dir."""
    return Settings(
        app_name="reading-plan-test",
        environment="development",
        log_level="DEBUG",
        database=DatabaseSettings(url="sqlite:///:memory:"),
        planner=PlannerSettings(),
        output=OutputSettings(result_dir=str(tmp_path / "result")),
    )


async def _create_engine(seed: bool = True, create_tables: bool = True):
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    if seed:
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with factory() as session:
            session.add_all(
                BibleVerse(idx=idx, book=book, chapter=chapter, long_label=label, count_of_chapter=count)
                for idx, book, chapter, label, count in VERSE_ROWS
            )
            await session.commit()
    return engine


@pytest.fixture
async def engine():
    """Test database engine seeded with a few chapters."""
    engine = await _create_engine()
    yield engine
    await engine.dispose()


@pytest.fixture
async def empty_engine():
    """Test database engine with the verse table but no rows."""
    engine = await _create_engine(seed=False)
    yield engine
    await engine.dispose()


@pytest.fixture
async def bare_engine():
    """Test database engine without any tables."""
    engine = await _create_engine(seed=False, create_tables=False)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    """Create test database session."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


def _build_app(settings: Settings, engine):
    from reading_plan.main import create_app

    app = create_app(settings)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.state.db_engine = engine
    return app


@pytest.fixture
def app(settings, engine):
    """Application backed by the seeded database."""
    return _build_app(settings, engine)


@pytest.fixture
async def client(app):
    """HTTP client bound to the seeded application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def empty_client(settings, empty_engine):
    """HTTP client bound to an app whose verse table is empty."""
    app = _build_app(settings, empty_engine)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
