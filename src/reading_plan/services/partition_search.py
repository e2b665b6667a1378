"""Feedback search over the tolerance fraction to hit a requested group count."""

import math
from typing import Optional, Sequence

from reading_plan.models.plan import SearchOptions, SearchResult
from reading_plan.models.unit import Partition, Unit
from reading_plan.services.chunk_builder import build_chunks
from reading_plan.utils.errors import EmptyInputError, PartitionUnavailableError
from reading_plan.utils.logging import get_logger

logger = get_logger("partition_search")


def search_partition(
    units: Sequence[Unit],
    target_average: float,
    initial_tolerance: float,
    target_group_count: int,
    options: Optional[SearchOptions] = None,
) -> SearchResult:
    """
    Nudge the tolerance fraction until the chunk count matches ``target_group_count``.

    Group count is a stepwise, non-smooth function of the tolerance, so this is a
    bounded hill climb: too few groups raises the tolerance by ``step``, too many
    lowers it (never below ``step``). The closest candidate seen is kept and
    returned if the loop runs out of iterations.

    Args:
        units: Ordered units to partition
        target_average: Desired size of one group
        initial_tolerance: Starting tolerance fraction
        target_group_count: Requested number of groups; validated by the caller
        options: Search tuning (defaults to SearchOptions())

    Returns:
        SearchResult with the best partition and its distance from the target

    Raises:
        EmptyInputError: If ``units`` is empty
        PartitionUnavailableError: If no candidate was ever produced
    """
    if not units:
        raise EmptyInputError(details={"target_group_count": target_group_count})

    options = options or SearchOptions()
    step = options.step
    current = max(step, initial_tolerance)

    best_plan: Optional[Partition] = None
    best_diff = math.inf
    best_tolerance = current
    best_iteration = 0

    for iteration in range(1, options.max_iterations + 1):
        candidate = build_chunks(units, target_average, current)
        diff = abs(candidate.group_count - target_group_count)

        if diff < best_diff:
            best_diff = diff
            best_plan = candidate
            best_tolerance = current
            best_iteration = iteration

        if diff <= options.convergence_tolerance:
            logger.info(
                f"Partition converged: groups={candidate.group_count}, "
                f"target={target_group_count}, iterations={iteration}, tolerance={current:.4f}",
                extra={"groups": candidate.group_count, "diff": diff, "iterations": iteration},
            )
            return SearchResult(partition=candidate, diff=diff, iterations=iteration, tolerance=current)

        if candidate.group_count < target_group_count:
            current += step
        else:
            current = max(step, current - step)

    if best_plan is None:
        raise PartitionUnavailableError(
            details={"target_group_count": target_group_count, "max_iterations": options.max_iterations}
        )

    logger.info(
        f"Partition search exhausted {options.max_iterations} iterations: "
        f"best groups={best_plan.group_count}, target={target_group_count}, diff={best_diff} "
        f"(found at iteration {best_iteration})",
        extra={"groups": best_plan.group_count, "diff": best_diff, "iterations": options.max_iterations},
    )
    return SearchResult(
        partition=best_plan,
        diff=int(best_diff),
        iterations=options.max_iterations,
        tolerance=best_tolerance,
    )
