"""Unit, group and partition models for reading plans."""

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Unit(BaseModel):
    """An indivisible item to be scheduled (one chapter)."""

    model_config = ConfigDict(frozen=True)

    sequence_index: int = Field(..., description="Ordering key of the unit's first row")
    label: str = Field(..., description="Display name of the containing book")
    group_label: Union[int, str] = Field(..., description="Chapter number within the book")
    size: int = Field(..., gt=0, description="Character count of the whole chapter")


class Group(BaseModel):
    """A contiguous run of units read on one day."""

    model_config = ConfigDict(frozen=True)

    start_unit: Unit = Field(..., description="First unit of the group")
    end_unit: Unit = Field(..., description="Last unit of the group")
    accumulated_size: int = Field(..., ge=0, description="Sum of unit sizes in the group")

    @model_validator(mode="after")
    def check_bounds(self) -> "Group":
        """Reject groups whose end precedes their start."""
        if self.start_unit.sequence_index > self.end_unit.sequence_index:
            raise ValueError("start_unit must not come after end_unit")
        return self


class Partition(BaseModel):
    """Ordered groups covering a unit list."""

    groups: List[Group] = Field(default_factory=list)

    @property
    def group_count(self) -> int:
        """Number of groups (days) in the partition."""
        return len(self.groups)

    @property
    def total_size(self) -> int:
        return sum(group.accumulated_size for group in self.groups)
