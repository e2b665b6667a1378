"""Reading plan orchestration: validate the request, partition, emit."""

import asyncio
import math
from typing import Any, Optional, Sequence

from reading_plan.config import Settings
from reading_plan.models.plan import (
    ReadingPlanResponse,
    ReadingPlanRow,
    ScheduleExport,
    SearchOptions,
    SearchResult,
)
from reading_plan.models.unit import Unit
from reading_plan.services.partition_search import search_partition
from reading_plan.services.schedule_writer import ScheduleWriter, render_rows
from reading_plan.utils.errors import EmptyInputError, InvalidTargetError
from reading_plan.utils.logging import get_logger

logger = get_logger("reading_plan_service")


def parse_target_days(value: Any) -> int:
    """
    Coerce a requested day count to a positive integer.

    Integers, integral floats and numeric strings (``"30"``, ``"30.0"``) are
    accepted; booleans, fractions, non-numeric strings, zero and negatives are not.

    Raises:
        InvalidTargetError: If the value is not a positive integer
    """
    if value is None or isinstance(value, bool):
        raise InvalidTargetError(value=value)

    if isinstance(value, int):
        days = value
    elif isinstance(value, (float, str)):
        try:
            number = float(value)
        except ValueError:
            raise InvalidTargetError(value=value) from None
        if not math.isfinite(number) or not number.is_integer():
            raise InvalidTargetError(value=value)
        days = int(number)
    else:
        raise InvalidTargetError(value=value)

    if days <= 0:
        raise InvalidTargetError(value=value)
    return days


def compute_target_average(units: Sequence[Unit], days: int) -> int:
    """Mean characters per day, rounded down."""
    return sum(unit.size for unit in units) // days


class ReadingPlanService:
    """
    Builds reading schedules from chapter units.

    Handles:
    - Turning the planner settings into search options
    - Running the partition search for a day count
    - Rendering the result as JSON rows or a CSV file
    """

    def __init__(self, settings: Settings, writer: Optional[ScheduleWriter] = None):
        self.settings = settings
        self.writer = writer or ScheduleWriter.from_settings(settings.output)

    @property
    def search_options(self) -> SearchOptions:
        planner = self.settings.planner
        return SearchOptions(
            convergence_tolerance=planner.convergence_tolerance,
            max_iterations=planner.max_iterations,
            step=planner.step,
        )

    def build_plan(self, units: Sequence[Unit], days: int) -> SearchResult:
        """
        Partition ``units`` into ``days`` groups as closely as the search allows.

        Raises:
            EmptyInputError: If there are no units
        """
        if not units:
            raise EmptyInputError(details={"days": days})

        target_average = compute_target_average(units, days)
        logger.info(
            f"Building reading plan: days={days}, units={len(units)}, target_average={target_average}",
            extra={"days": days, "units": len(units), "target_average": target_average},
        )
        result = search_partition(
            units,
            target_average,
            self.settings.planner.initial_tolerance,
            days,
            self.search_options,
        )
        if result.diff:
            logger.warning(
                f"Reading plan has {result.partition.group_count} days instead of {days} "
                f"(diff={result.diff})",
                extra={"days": days, "groups": result.partition.group_count, "diff": result.diff},
            )
        return result

    async def plan(self, units: Sequence[Unit], days: int) -> SearchResult:
        """Run ``build_plan`` in a worker thread so the event loop keeps serving requests."""
        return await asyncio.to_thread(self.build_plan, units, days)

    async def preview(self, units: Sequence[Unit], days: int) -> ReadingPlanResponse:
        """Build a plan and return it as JSON-ready rows."""
        result = await self.plan(units, days)
        return ReadingPlanResponse(
            days=days,
            target_average=compute_target_average(units, days),
            group_count=result.partition.group_count,
            diff=result.diff,
            rows=[ReadingPlanRow(**row) for row in render_rows(result.partition)],
        )

    async def export(self, units: Sequence[Unit], days: int) -> ScheduleExport:
        """Build a plan and write it as a CSV file."""
        result = await self.plan(units, days)
        return await self.writer.write(result.partition, days)
