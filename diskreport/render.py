"""
diskreport.render
AUTHOR: carter-vin

Compact console table (Error column stays in the export only)
"""

from __future__ import annotations

from typing import Iterable

from diskreport.model import CONSOLE_COLUMNS, DiskRecord

# Right-align numeric columns for quick scanning
_NUMERIC_COLUMNS = {"TotalGB", "UsedGB", "FreeGB", "PercentFree"}


def render_table(records: Iterable[DiskRecord]) -> str:
    records = list(records)
    if not records:
        return "No disk records."

    rows = [list(CONSOLE_COLUMNS)]
    for record in records:
        row = record.to_row()
        rows.append([row[column] for column in CONSOLE_COLUMNS])

    widths = [max(len(row[i]) for row in rows) for i in range(len(CONSOLE_COLUMNS))]
    lines: list[str] = []

    for index, row in enumerate(rows):
        padded = [
            row[i].rjust(widths[i]) if CONSOLE_COLUMNS[i] in _NUMERIC_COLUMNS else row[i].ljust(widths[i])
            for i in range(len(CONSOLE_COLUMNS))
        ]
        lines.append("  ".join(padded).rstrip())
        if index == 0:
            lines.append("  ".join("-" * width for width in widths))

    return "\n".join(lines)
