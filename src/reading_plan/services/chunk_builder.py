"""Greedy chunking of an ordered unit list into contiguous groups."""

import math
from typing import List, Optional, Sequence

from reading_plan.models.unit import Group, Partition, Unit
from reading_plan.utils.logging import get_logger

logger = get_logger("chunk_builder")


def closing_threshold(target_average: float, tolerance_fraction: float) -> int:
    """Size a group must strictly exceed before it is closed."""
    return math.floor(target_average - target_average * tolerance_fraction)


def build_chunks(
    units: Sequence[Unit],
    target_average: float,
    tolerance_fraction: float,
) -> Partition:
    """
    Walk ``units`` in order and close a group as soon as its size passes the threshold.

    Whatever is left after the walk becomes the final group, even when it is
    smaller than the threshold. A threshold at or below zero puts every unit
    in its own group.

    Args:
        units: Ordered units to group
        target_average: Desired size of one group
        tolerance_fraction: How far below ``target_average`` a group may close

    Returns:
        Partition covering every unit exactly once
    """
    threshold = closing_threshold(target_average, tolerance_fraction)

    groups: List[Group] = []
    start_unit: Optional[Unit] = None
    running = 0

    for unit in units:
        if running == 0:
            start_unit = unit

        running += unit.size

        if running > threshold:
            groups.append(Group(start_unit=start_unit, end_unit=unit, accumulated_size=running))
            running = 0

    # Trailing chapters that never reached the threshold
    if running > 0:
        groups.append(Group(start_unit=start_unit, end_unit=units[-1], accumulated_size=running))

    logger.debug(
        "Built chunks",
        extra={"threshold": threshold, "tolerance": tolerance_fraction, "groups": len(groups)},
    )
    return Partition(groups=groups)
