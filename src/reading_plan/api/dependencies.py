"""FastAPI dependencies shared by the routers."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from reading_plan.config import Settings
from reading_plan.database.session import get_session
from reading_plan.repositories.unit_repository import UnitRepository
from reading_plan.services.reading_plan_service import ReadingPlanService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_unit_repository(session: AsyncSession = Depends(get_session)) -> UnitRepository:
    return UnitRepository(session)


def get_reading_plan_service(settings: Settings = Depends(get_app_settings)) -> ReadingPlanService:
    return ReadingPlanService(settings)
