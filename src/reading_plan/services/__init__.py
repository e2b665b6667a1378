"""Services package."""

from reading_plan.services.chunk_builder import build_chunks
from reading_plan.services.partition_search import search_partition
from reading_plan.services.reading_plan_service import (
    ReadingPlanService,
    compute_target_average,
    parse_target_days,
)
from reading_plan.services.schedule_writer import ScheduleWriter, render_csv, render_rows

__all__ = [
    "build_chunks",
    "search_partition",
    "ReadingPlanService",
    "compute_target_average",
    "parse_target_days",
    "ScheduleWriter",
    "render_csv",
    "render_rows",
]
