"""Reading plan endpoints."""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from reading_plan.api.dependencies import get_reading_plan_service, get_unit_repository
from reading_plan.models.plan import ReadingPlanRequest, ReadingPlanResponse
from reading_plan.repositories.unit_repository import UnitRepository
from reading_plan.services.reading_plan_service import ReadingPlanService, parse_target_days
from reading_plan.utils.logging import get_logger

logger = get_logger("plans")

router = APIRouter(prefix="/plans", tags=["plans"])

# Route kept from the first release of the service; clients post {"days": N}
legacy_router = APIRouter(tags=["plans"])


def content_disposition(filename: str) -> str:
    """Attachment header that survives non-ASCII filenames (RFC 6266)."""
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


async def _export_schedule(
    payload: Optional[ReadingPlanRequest],
    repository: UnitRepository,
    service: ReadingPlanService,
) -> Response:
    days = parse_target_days(payload.days if payload else None)
    units = await repository.fetch_units()
    schedule = await service.export(units, days)
    logger.info(f"Sending schedule file: {schedule.filename}", extra={"days": days})
    # The file on disk can be replaced by a concurrent export; send our own bytes
    return Response(
        content=schedule.content,
        media_type="text/csv",
        headers={"Content-Disposition": content_disposition(schedule.filename)},
    )


@router.post("", response_model=ReadingPlanResponse)
async def preview_plan(
    payload: Optional[ReadingPlanRequest] = None,
    repository: UnitRepository = Depends(get_unit_repository),
    service: ReadingPlanService = Depends(get_reading_plan_service),
) -> ReadingPlanResponse:
    """
    Build a reading plan and return it as JSON.

    Nothing is written to disk; use ``/plans/export`` or ``/bible`` for the CSV.
    """
    days = parse_target_days(payload.days if payload else None)
    units = await repository.fetch_units()
    return await service.preview(units, days)


@router.post("/export", response_class=Response)
async def export_plan(
    payload: Optional[ReadingPlanRequest] = None,
    repository: UnitRepository = Depends(get_unit_repository),
    service: ReadingPlanService = Depends(get_reading_plan_service),
):
    """Build a reading plan, write it as CSV and return the file."""
    return await _export_schedule(payload, repository, service)


@legacy_router.post("/bible", response_class=Response)
async def export_bible_plan(
    payload: Optional[ReadingPlanRequest] = None,
    repository: UnitRepository = Depends(get_unit_repository),
    service: ReadingPlanService = Depends(get_reading_plan_service),
):
    """Build a reading plan, write it as CSV and return the file."""
    return await _export_schedule(payload, repository, service)
