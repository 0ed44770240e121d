"""
diskreport.model
AUTHOR: carter-vin

Report record schema + deterministic row serialization.

Design goals:
- One immutable record per disk (OK) or per failed host (FAILED)
- Explicit column mapping (no accidental serialization via __dict__)
- Deterministic ordering: (server, drive), absent drive first
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

# Column order shared by the export and (minus Error) the console table
EXPORT_COLUMNS = [
    "Server",
    "Drive",
    "VolumeName",
    "FileSystem",
    "TotalGB",
    "UsedGB",
    "FreeGB",
    "PercentFree",
    "Status",
    "Error",
]

CONSOLE_COLUMNS = [column for column in EXPORT_COLUMNS if column != "Error"]


class Status(str, Enum):
    OK = "OK"
    FAILED = "FAILED"


def _fmt_number(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:.2f}"


def _fmt_text(value: str | None) -> str:
    return "" if value is None else value


def _parse_number(value: str) -> float | None:
    return float(value) if value else None


def _parse_text(value: str) -> str | None:
    return value if value else None


@dataclass(frozen=True)
class DiskRecord:
    """
    One report row
    - OK: disk fields populated, error None
    - FAILED: disk fields None, error holds the failure description
    """

    server: str
    status: Status
    drive: str | None = None
    volume_name: str | None = None
    file_system: str | None = None
    total_gb: float | None = None
    used_gb: float | None = None
    free_gb: float | None = None
    percent_free: float | None = None
    error: str | None = None

    @classmethod
    def ok(
        cls,
        server: str,
        *,
        drive: str | None,
        volume_name: str | None,
        file_system: str | None,
        total_gb: float,
        used_gb: float,
        free_gb: float,
        percent_free: float,
    ) -> "DiskRecord":
        return cls(
            server=server,
            status=Status.OK,
            drive=drive,
            volume_name=volume_name,
            file_system=file_system,
            total_gb=total_gb,
            used_gb=used_gb,
            free_gb=free_gb,
            percent_free=percent_free,
        )

    @classmethod
    def failed(cls, server: str, error: str) -> "DiskRecord":
        # Never emit a FAILED row without a description
        return cls(server=server, status=Status.FAILED, error=error or "Unknown error")

    def to_row(self) -> dict[str, str]:
        """
        Serialize to export columns; absent values become empty strings
        """
        return {
            "Server": self.server,
            "Drive": _fmt_text(self.drive),
            "VolumeName": _fmt_text(self.volume_name),
            "FileSystem": _fmt_text(self.file_system),
            "TotalGB": _fmt_number(self.total_gb),
            "UsedGB": _fmt_number(self.used_gb),
            "FreeGB": _fmt_number(self.free_gb),
            "PercentFree": _fmt_number(self.percent_free),
            "Status": self.status.value,
            "Error": _fmt_text(self.error),
        }

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "DiskRecord":
        """
        Inverse of to_row; empty fields become None

        Raises ValueError on an unknown status or a non-numeric GB cell
        """
        return cls(
            server=row["Server"],
            status=Status(row["Status"]),
            drive=_parse_text(row["Drive"]),
            volume_name=_parse_text(row["VolumeName"]),
            file_system=_parse_text(row["FileSystem"]),
            total_gb=_parse_number(row["TotalGB"]),
            used_gb=_parse_number(row["UsedGB"]),
            free_gb=_parse_number(row["FreeGB"]),
            percent_free=_parse_number(row["PercentFree"]),
            error=_parse_text(row["Error"]),
        )

    def sort_key(self) -> tuple[str, int, str]:
        # Absent drive sorts before any present drive for the same server
        if self.drive is None:
            return self.server, 0, ""
        return self.server, 1, self.drive


def sort_records(records: Iterable[DiskRecord]) -> list[DiskRecord]:
    """
    Return a new list ordered by (server, drive); input is not modified
    """
    return sorted(records, key=lambda record: record.sort_key())
