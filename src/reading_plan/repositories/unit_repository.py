"""Repository that reads chapter units from the verse table."""

from typing import List

from pydantic import ValidationError
from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reading_plan.database.models import BibleVerse
from reading_plan.models.unit import Unit
from reading_plan.utils.errors import UnitSourceError
from reading_plan.utils.logging import get_logger

logger = get_logger("unit_repository")


class UnitRepository:
    """Repository for chapter-level units."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: Async database session
        """
        self.session = session

    async def fetch_units(self) -> List[Unit]:
        """
        Get one unit per chapter, ordered by verse index.

        The table holds one row per verse and repeats the chapter's character
        count on every row, so only the first verse of each (chapter, book)
        pair is selected.

        Returns:
            Units ordered ascending by ``sequence_index``

        Raises:
            UnitSourceError: If the query fails
        """
        first_verse = (
            select(
                BibleVerse.chapter,
                BibleVerse.book,
                func.min(BibleVerse.idx).label("min_idx"),
            )
            .group_by(BibleVerse.chapter, BibleVerse.book)
            .subquery()
        )
        query = (
            select(
                BibleVerse.idx,
                BibleVerse.long_label,
                BibleVerse.chapter,
                BibleVerse.book,
                BibleVerse.count_of_chapter,
            )
            .join(
                first_verse,
                and_(
                    BibleVerse.chapter == first_verse.c.chapter,
                    BibleVerse.book == first_verse.c.book,
                    BibleVerse.idx == first_verse.c.min_idx,
                ),
            )
            .order_by(BibleVerse.idx)
        )

        try:
            result = await self.session.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching chapter units: {e}")
            raise UnitSourceError(details={"reason": str(e)}) from e

        try:
            units = [
                Unit(
                    sequence_index=row.idx,
                    label=row.long_label,
                    group_label=row.chapter,
                    size=row.count_of_chapter,
                )
                for row in rows
            ]
        except ValidationError as e:
            logger.error(f"Invalid chapter row: {e}")
            raise UnitSourceError("Invalid chapter data in database", details={"reason": str(e)}) from e

        logger.info(f"Fetched {len(units)} chapter units")
        return units
