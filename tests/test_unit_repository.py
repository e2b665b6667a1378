"""Tests for the chapter unit repository."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reading_plan.database.models import BibleVerse
from reading_plan.repositories.unit_repository import UnitRepository
from reading_plan.utils.errors import UnitSourceError


async def test_fetch_units_returns_one_unit_per_chapter(session):
    units = await UnitRepository(session).fetch_units()

    assert [(u.sequence_index, u.label, u.group_label, u.size) for u in units] == [
        (1, "Genesis", 1, 300),
        (4, "Genesis", 2, 200),
        (6, "Exodus", 1, 250),
        (8, "Exodus", 2, 250),
        (9, "Ruth", 1, 100),
        (11, "Ruth", 2, 400),
    ]


async def test_fetch_units_distinguishes_same_chapter_number_across_books(session):
    units = await UnitRepository(session).fetch_units()

    chapter_ones = [u.label for u in units if u.group_label == 1]
    assert chapter_ones == ["Genesis", "Exodus", "Ruth"]


async def test_fetch_units_empty_table(empty_engine):
    factory = async_sessionmaker(empty_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        units = await UnitRepository(session).fetch_units()

    assert units == []


async def test_fetch_units_missing_table_raises_unit_source_error(bare_engine):
    factory = async_sessionmaker(bare_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        with pytest.raises(UnitSourceError) as exc_info:
            await UnitRepository(session).fetch_units()

    assert exc_info.value.status_code == 500
    assert exc_info.value.code == "UNIT_SOURCE_ERROR"


async def test_fetch_units_rejects_non_positive_chapter_size(empty_engine):
    factory = async_sessionmaker(empty_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add(BibleVerse(idx=1, book=1, chapter=1, long_label="Genesis", count_of_chapter=0))
        await session.commit()

        with pytest.raises(UnitSourceError):
            await UnitRepository(session).fetch_units()
