"""CSV output for reading schedules."""

import asyncio
import csv
import io
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Union

from reading_plan.config import OutputSettings
from reading_plan.models.plan import ScheduleExport
from reading_plan.models.unit import Partition
from reading_plan.utils.errors import ExportError
from reading_plan.utils.logging import get_logger

logger = get_logger("schedule_writer")

# (record key, column title)
SCHEDULE_COLUMNS = [
    ("date", "날짜"),
    ("start_label", "성경(시작)"),
    ("start_chapter", "장(시작)"),
    ("end_label", "성경(끝)"),
    ("end_chapter", "장(끝)"),
    ("add_sum", "글 수"),
]


def render_rows(partition: Partition) -> List[Dict[str, Any]]:
    """Turn each group into one schedule row, numbering days from 1."""
    return [
        {
            "date": day,
            "start_label": group.start_unit.label,
            "start_chapter": group.start_unit.group_label,
            "end_label": group.end_unit.label,
            "end_chapter": group.end_unit.group_label,
            "add_sum": group.accumulated_size,
        }
        for day, group in enumerate(partition.groups, start=1)
    ]


def render_csv(rows: List[Dict[str, Any]]) -> str:
    """Render schedule rows as CSV text with the header line first."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([title for _, title in SCHEDULE_COLUMNS])
    for row in rows:
        writer.writerow([row[key] for key, _ in SCHEDULE_COLUMNS])
    return buffer.getvalue()


class ScheduleWriter:
    """
    Writes a partition to a CSV file named after the requested day count.

    Handles:
    - Creating the output directory
    - Rendering one row per group with the schedule headers
    - Replacing the file atomically so concurrent writers never expose a partial file
    """

    def __init__(self, output_dir: Union[str, Path], filename_template: str):
        self.output_dir = Path(output_dir)
        self.filename_template = filename_template

    @classmethod
    def from_settings(cls, output_settings: OutputSettings) -> "ScheduleWriter":
        return cls(output_settings.result_dir, output_settings.filename_template)

    def filename_for(self, target_group_count: int) -> str:
        return self.filename_template.format(days=target_group_count)

    def _write_sync(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def write(self, partition: Partition, target_group_count: int) -> ScheduleExport:
        """
        Write the schedule to ``output_dir``.

        Args:
            partition: Groups to render, in reading order
            target_group_count: Requested day count, embedded in the filename

        Returns:
            The written path together with the exact bytes written

        Raises:
            ExportError: If the file cannot be written
        """
        path = self.output_dir / self.filename_for(target_group_count)
        rows = render_rows(partition)
        content = render_csv(rows).encode("utf-8")

        try:
            await asyncio.to_thread(self._write_sync, path, content)
        except OSError as e:
            logger.error(f"Failed to write schedule: {path} - {e}", exc_info=True)
            raise ExportError(path=str(path), details={"reason": str(e)}) from e

        logger.info(
            f"Schedule written: {path}, rows={len(rows)}",
            extra={"days": target_group_count, "path": str(path)},
        )
        return ScheduleExport(path=path, content=content)
