"""
diskreport.emit

AUTHOR: carter-vin

OUTPUT:
- CSV export, UTF-8
- header row + one row per record
- absent values as empty fields

Design goals:
- Create parent directory if missing
- Synthesize a sortable timestamped name when no path is given
- Provide explicit error surfaces (IO errors propagate; the run fails)
"""

from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from diskreport.model import EXPORT_COLUMNS, DiskRecord

REPORT_PREFIX = "DiskReport"
REPORT_SUFFIX = ".csv"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def default_report_path(now: datetime | None = None, *, directory: Path | None = None) -> Path:
    """
    DiskReport_<YYYY-MM-DD_HH-MM-SS>.csv in the current working directory
    """
    if now is None:
        now = datetime.now()
    if directory is None:
        directory = Path.cwd()
    return directory / f"{REPORT_PREFIX}_{now.strftime(TIMESTAMP_FORMAT)}{REPORT_SUFFIX}"


def write_report_csv(
    records: Iterable[DiskRecord],
    out_path: Path,
    *,
    on_write_error: Optional[Callable[[Exception, Path], None]] = None,
) -> Path:
    """
    Write every record (Error included) to out_path

    Failure semantics:
    - raises on IO errors; on_write_error lets the caller log first
    """
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
            writer.writeheader()
            for record in records:
                writer.writerow(record.to_row())
    except OSError as e:
        if on_write_error is not None:
            on_write_error(e, out_path)
        raise

    return out_path.resolve()
