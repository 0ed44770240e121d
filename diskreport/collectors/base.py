"""
diskreport.collectors.base
AUTHOR: carter-vin

Collaborator contracts + raw inventory entry

- Prober: probe(host) -> bool, may raise
- InventoryService: list_fixed_disks(host) -> list[RawDisk], may raise
  RemoteQueryError subclasses
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol


def coerce_bytes(value: Any) -> int:
    """
    Missing or unparseable capacity -> 0
    """
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class RawDisk:
    """
    One fixed volume as reported by an inventory service
    - byte counts are always ints (nulls coalesced to 0 on construction)
    """

    device_id: str | None
    volume_name: str | None
    file_system: str | None
    total_bytes: int
    free_bytes: int

    @staticmethod
    def from_dict(payload: Mapping[str, Any]) -> "RawDisk":
        return RawDisk(
            device_id=_optional_text(payload.get("device_id")),
            volume_name=_optional_text(payload.get("volume_name")),
            file_system=_optional_text(payload.get("file_system")),
            total_bytes=coerce_bytes(payload.get("total_bytes")),
            free_bytes=coerce_bytes(payload.get("free_bytes")),
        )


class Prober(Protocol):
    def probe(self, host: str) -> bool: ...


class InventoryService(Protocol):
    def list_fixed_disks(self, host: str) -> list[RawDisk]: ...
