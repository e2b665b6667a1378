"""Repositories package."""

from reading_plan.repositories.unit_repository import UnitRepository

__all__ = ["UnitRepository"]
