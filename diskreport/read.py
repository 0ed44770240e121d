"""
diskreport.read
AUTHOR: carter-vin

CSV reader for exported reports
"""

from __future__ import annotations

import csv
from pathlib import Path

from diskreport.model import EXPORT_COLUMNS, DiskRecord


def read_report_csv(path: Path) -> list[dict[str, str]]:
    """
    Parse an exported report back into row dicts keyed by export column

    Raises ValueError when the header does not match the export layout
    """
    with path.open(encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames != EXPORT_COLUMNS:
            raise ValueError(f"unexpected report header: {reader.fieldnames}")
        # Missing trailing fields read back as empty, same as absent values
        return [{column: row.get(column) or "" for column in EXPORT_COLUMNS} for row in reader]


def read_report_records(path: Path) -> list[DiskRecord]:
    """
    Parse an exported report back into DiskRecord objects
    """
    return [DiskRecord.from_row(row) for row in read_report_csv(path)]
