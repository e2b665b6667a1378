"""Search options, results and API schemas for reading plans."""

from pathlib import Path
from typing import Any, List, Union

from pydantic import BaseModel, Field

from reading_plan.models.unit import Partition


class SearchOptions(BaseModel):
    """Tuning knobs for the partition search."""

    convergence_tolerance: int = Field(
        default=0, ge=0, description="Acceptable |groups - target| to stop early"
    )
    max_iterations: int = Field(default=5000, gt=0, description="Hard cap on search iterations")
    step: float = Field(default=0.001, gt=0, description="Per-iteration tolerance adjustment")


class SearchResult(BaseModel):
    """The partition judged closest to the requested group count."""

    partition: Partition
    diff: int = Field(..., ge=0, description="|partition.group_count - target|")
    iterations: int = Field(..., ge=1, description="Iterations run before returning")
    tolerance: float = Field(..., description="Tolerance fraction that produced the partition")


class ReadingPlanRequest(BaseModel):
    """Request body for plan endpoints.

    ``days`` is left loosely typed so that malformed values reach
    ``parse_target_days`` and produce a 400 rather than a schema error.
    """

    days: Any = Field(
        default=None, description="Number of reading days"
    )


class ReadingPlanRow(BaseModel):
    """One day of the rendered schedule."""

    date: int = Field(..., ge=1, description="1-based day number")
    start_label: str
    start_chapter: Union[int, str]
    end_label: str
    end_chapter: Union[int, str]
    add_sum: int = Field(..., description="Characters read on this day")


class ReadingPlanResponse(BaseModel):
    """JSON preview of a reading plan."""

    days: int
    target_average: int
    group_count: int
    diff: int
    rows: List[ReadingPlanRow]


class ScheduleExport(BaseModel):
    """A rendered CSV schedule and where its copy was stored."""

    path: Path = Field(..., description="File the schedule was written to")
    content: bytes = Field(..., description="UTF-8 CSV exactly as written")

    @property
    def filename(self) -> str:
        return self.path.name
