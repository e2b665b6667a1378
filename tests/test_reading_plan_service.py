"""Tests for the reading plan orchestration service."""

import csv
import threading

import pytest

from conftest import assert_covers, make_units
from reading_plan.config import PlannerSettings
from reading_plan.services.reading_plan_service import (
    ReadingPlanService,
    compute_target_average,
    parse_target_days,
)
from reading_plan.utils.errors import EmptyInputError, InvalidTargetError


@pytest.mark.parametrize(
    "value,expected",
    [(1, 1), (30, 30), (365, 365), (30.0, 30), ("30", 30), (" 7 ", 7), ("90.0", 90)],
)
def test_parse_target_days_accepts_positive_integers(value, expected):
    assert parse_target_days(value) == expected


@pytest.mark.parametrize(
    "value",
    [None, 0, -3, 1.5, "abc", "", "2.5", "-1", "0x1E", True, False, float("nan"), float("inf"), "inf", [3], {"days": 3}],
)
def test_parse_target_days_rejects_invalid_values(value):
    with pytest.raises(InvalidTargetError) as exc_info:
        parse_target_days(value)

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "INVALID_TARGET"


def test_compute_target_average_rounds_down():
    units = make_units([300, 200, 250, 250, 100, 401])

    assert compute_target_average(units, 3) == 500
    assert compute_target_average(units, 4) == 375


def test_build_plan_uses_planner_settings(settings):
    units = make_units([100] * 10)
    settings.planner = PlannerSettings(convergence_tolerance=0, max_iterations=25, step=0.01)
    service = ReadingPlanService(settings)

    result = service.build_plan(units, 50)

    assert result.diff == 40
    assert result.iterations == 25


def test_build_plan_hits_requested_day_count(settings):
    units = make_units([300, 200, 250, 250, 100, 400])
    service = ReadingPlanService(settings)

    result = service.build_plan(units, 3)

    assert result.diff == 0
    assert [g.accumulated_size for g in result.partition.groups] == [500, 500, 500]
    assert_covers(result.partition, units)


def test_build_plan_rejects_empty_units(settings):
    service = ReadingPlanService(settings)

    with pytest.raises(EmptyInputError):
        service.build_plan([], 3)


async def test_preview_returns_numbered_rows(settings):
    units = make_units([300, 200, 250, 250, 100, 400], label="Genesis")
    service = ReadingPlanService(settings)

    response = await service.preview(units, 3)

    assert response.days == 3
    assert response.target_average == 500
    assert response.group_count == 3
    assert response.diff == 0
    assert [row.date for row in response.rows] == [1, 2, 3]
    first = response.rows[0]
    assert (first.start_label, first.start_chapter, first.end_chapter, first.add_sum) == (
        "Genesis",
        1,
        2,
        500,
    )


async def test_export_writes_csv_named_after_days(settings, tmp_path):
    units = make_units([300, 200, 250, 250, 100, 400], label="Exodus")
    service = ReadingPlanService(settings)

    schedule = await service.export(units, 3)
    path = schedule.path

    assert path == tmp_path / "result" / "성경통독표(3일).csv"
    with path.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["날짜", "성경(시작)", "장(시작)", "성경(끝)", "장(끝)", "글 수"]
    assert rows[1:] == [
        ["1", "Exodus", "1", "Exodus", "2", "500"],
        ["2", "Exodus", "3", "Exodus", "4", "500"],
        ["3", "Exodus", "5", "Exodus", "6", "500"],
    ]
    assert path.read_bytes() == schedule.content


async def test_plan_runs_search_in_worker_thread(settings, monkeypatch):
    from reading_plan.services import reading_plan_service

    real_search = reading_plan_service.search_partition
    threads = []

    def recording_search(*args, **kwargs):
        threads.append(threading.get_ident())
        return real_search(*args, **kwargs)

    monkeypatch.setattr(reading_plan_service, "search_partition", recording_search)
    service = ReadingPlanService(settings)

    result = await service.plan(make_units([100] * 5), 5)

    assert result.diff == 0
    assert threads and threads[0] != threading.get_ident()
