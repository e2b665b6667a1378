"""Pydantic models for units, partitions and plan schemas."""

from reading_plan.models.plan import (
    ReadingPlanRequest,
    ReadingPlanResponse,
    ReadingPlanRow,
    ScheduleExport,
    SearchOptions,
    SearchResult,
)
from reading_plan.models.unit import Group, Partition, Unit

__all__ = [
    "Unit",
    "Group",
    "Partition",
    "SearchOptions",
    "SearchResult",
    "ReadingPlanRequest",
    "ReadingPlanRow",
    "ReadingPlanResponse",
    "ScheduleExport",
]
