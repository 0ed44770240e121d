"""
diskreport.collect
AUTHOR: carter-vin

Per-host collection loop

Per host (strictly sequential, one attempt each):
1) reachability probe
2) fixed-disk inventory query
3) per-disk derivation (bytes -> GB, percent free)
4) any failure -> exactly one FAILED record, move on

Host errors are collected as data (HostOutcome); nothing raised for one host
reaches another host or the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from diskreport import __version__
from diskreport.collectors.base import InventoryService, Prober, RawDisk
from diskreport.collectors.inventory import LocalInventory, RoutingInventory, SshDfInventory
from diskreport.collectors.probe import PingProber
from diskreport.config import RunConfig
from diskreport.errors import HostUnreachable, InventoryQueryError
from diskreport.logging import emit_event
from diskreport.model import DiskRecord

BYTES_PER_GB = 2**30

PING_FAILED = "Ping failed"


def _gb(value_bytes: int) -> float:
    if value_bytes <= 0:
        return 0
    return round(value_bytes / BYTES_PER_GB, 2)


def derive_disk_record(server: str, disk: RawDisk) -> DiskRecord:
    """
    Convert one raw inventory entry into an OK record
    """
    total = disk.total_bytes
    free = disk.free_bytes

    if total > 0:
        used_gb = round((total - free) / BYTES_PER_GB, 2)
        percent_free = round((free / total) * 100, 2)
    else:
        # Degenerate disk, not an error
        used_gb = 0
        percent_free = 0

    return DiskRecord.ok(
        server,
        drive=disk.device_id,
        volume_name=disk.volume_name,
        file_system=disk.file_system,
        total_gb=_gb(total),
        used_gb=used_gb,
        free_gb=_gb(free),
        percent_free=percent_free,
    )


@dataclass(frozen=True)
class HostOutcome:
    """
    Normalized per-host result
    - ok: false=failure, description in error_message
    - records: OK disk records if ok=true (may be empty)
    """

    host: str
    ok: bool
    records: list[DiskRecord] = field(default_factory=list)
    error_type: str | None = None
    error_message: str | None = None

    def to_records(self) -> list[DiskRecord]:
        if self.ok:
            return list(self.records)
        return [DiskRecord.failed(self.host, self.error_message or "")]


def _check_reachable(host: str, prober: Prober) -> None:
    try:
        reachable = prober.probe(host)
    except Exception as e:
        raise HostUnreachable(f"{PING_FAILED}: {e}") from e
    if not reachable:
        raise HostUnreachable(PING_FAILED)


def _query_disks(host: str, inventory: InventoryService) -> list[RawDisk]:
    try:
        return list(inventory.list_fixed_disks(host))
    except Exception as e:
        raise InventoryQueryError(str(e) or type(e).__name__) from e


def collect_host(host: str, *, prober: Prober, inventory: InventoryService) -> HostOutcome:
    """
    Run the full per-host procedure & collect failure as data
    """
    try:
        _check_reachable(host, prober)
        disks = _query_disks(host, inventory)
        records = [derive_disk_record(host, disk) for disk in disks]
    except (HostUnreachable, InventoryQueryError) as e:
        return HostOutcome(
            host=host,
            ok=False,
            error_type=type(e).__name__,
            error_message=str(e),
        )
    except Exception as e:
        # Derivation bugs must not take down the run either
        return HostOutcome(
            host=host,
            ok=False,
            error_type=type(e).__name__,
            error_message=str(e) or type(e).__name__,
        )

    return HostOutcome(host=host, ok=True, records=records)


def collect_all(
    targets: Iterable[str],
    *,
    prober: Prober,
    inventory: InventoryService,
) -> list[DiskRecord]:
    """
    Collect records for every target in order; the result only grows
    """
    results: list[DiskRecord] = []

    for host in targets:
        outcome = collect_host(host, prober=prober, inventory=inventory)

        if outcome.ok:
            emit_event(
                "host_collected",
                tool_version=__version__,
                host=host,
                disks=len(outcome.records),
            )
        else:
            event_type = (
                "host_probe_failed"
                if outcome.error_type == HostUnreachable.__name__
                else "host_query_failed"
            )
            emit_event(
                event_type,
                tool_version=__version__,
                host=host,
                error_type=outcome.error_type,
                message=outcome.error_message,
            )

        results.extend(outcome.to_records())

    return results


def build_services(config: RunConfig) -> tuple[Prober, InventoryService]:
    """
    Default collaborators for a run
    """
    prober = PingProber(timeout_s=config.probe_timeout_s)
    inventory = RoutingInventory(
        local=LocalInventory(),
        remote=SshDfInventory(timeout_s=config.query_timeout_s),
    )
    return prober, inventory
