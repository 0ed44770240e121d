"""
diskreport.collectors.inventory
AUTHOR: carter-vin

Fixed-disk inventory services
- LocalInventory: psutil partitions + usage on this machine
- SshDfInventory: `df -P -T -B1` on a remote host over ssh (BatchMode; keys
  and sessions come from the operator's ssh setup)
- RoutingInventory: local names -> LocalInventory, everything else -> ssh

Fixed = local, non-removable, non-network. Pseudo filesystems are dropped too.
"""

from __future__ import annotations

import socket
import subprocess
from typing import Callable

import psutil

from diskreport.collectors.base import InventoryService, RawDisk
from diskreport.errors import (
    AuthError,
    InventoryNotFoundError,
    TransportError,
)

NETWORK_FSTYPES = {
    "nfs",
    "nfs4",
    "cifs",
    "smbfs",
    "smb3",
    "sshfs",
    "fuse.sshfs",
    "afpfs",
    "webdav",
    "davfs",
    "9p",
    "glusterfs",
    "ceph",
}

PSEUDO_FSTYPES = {
    "",
    "tmpfs",
    "devtmpfs",
    "squashfs",
    "overlay",
    "proc",
    "sysfs",
    "devfs",
    "autofs",
}

REMOVABLE_OPTS = {"removable", "cdrom"}

LOCAL_HOST_NAMES = {"localhost", "127.0.0.1", "::1", "."}


def _is_fixed_fstype(fstype: str) -> bool:
    fstype = fstype.lower()
    return fstype not in NETWORK_FSTYPES and fstype not in PSEUDO_FSTYPES


class LocalInventory:
    """
    Fixed volumes on this machine via psutil
    """

    def __init__(self, *, windows: bool | None = None) -> None:
        self._windows = psutil.WINDOWS if windows is None else windows

    def _is_fixed(self, partition) -> bool:
        opts = {opt.strip().lower() for opt in (partition.opts or "").split(",")}
        if self._windows:
            return "fixed" in opts
        if opts & REMOVABLE_OPTS:
            return False
        return _is_fixed_fstype(partition.fstype or "")

    def list_fixed_disks(self, host: str) -> list[RawDisk]:
        disks: list[RawDisk] = []
        for partition in psutil.disk_partitions(all=False):
            if not self._is_fixed(partition):
                continue
            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except PermissionError:
                # Volume we cannot stat; skip it rather than fail the host
                continue

            volume_name = partition.device if partition.device != partition.mountpoint else None
            disks.append(
                RawDisk.from_dict(
                    {
                        "device_id": partition.mountpoint,
                        "volume_name": volume_name,
                        "file_system": partition.fstype,
                        "total_bytes": usage.total,
                        "free_bytes": usage.free,
                    }
                )
            )
        return disks


def parse_df_output(contents: str) -> list[RawDisk]:
    """
    Parse POSIX `df -P -T -B1` output into fixed-disk entries

    Columns: Filesystem Type 1-blocks Used Available Capacity Mounted-on
    Mount points may contain spaces (everything after column 6).
    """
    disks: list[RawDisk] = []
    for line in contents.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 7:
            continue
        device, fstype = parts[0], parts[1]
        if not device.startswith("/dev/"):
            continue
        if not _is_fixed_fstype(fstype):
            continue
        disks.append(
            RawDisk.from_dict(
                {
                    "device_id": " ".join(parts[6:]),
                    "volume_name": device,
                    "file_system": fstype,
                    "total_bytes": parts[2],
                    "free_bytes": parts[4],
                }
            )
        )
    return disks


class SshDfInventory:
    """
    Remote fixed volumes via ssh + df

    Failure semantics:
    - ssh auth rejected -> AuthError
    - ssh missing / connect failure / timeout -> TransportError
    - df missing on the remote -> InventoryNotFoundError
    """

    REMOTE_COMMAND = "LC_ALL=C df -P -T -B1"

    def __init__(
        self,
        timeout_s: int = 30,
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.timeout_s = timeout_s
        self._runner = runner

    def _command(self, host: str) -> list[str]:
        return [
            "ssh",
            "-o",
            "BatchMode=yes",
            "-o",
            f"ConnectTimeout={self.timeout_s}",
            # Ends option parsing so a host name is never read as an ssh flag
            "--",
            host,
            self.REMOTE_COMMAND,
        ]

    def list_fixed_disks(self, host: str) -> list[RawDisk]:
        try:
            proc = self._runner(
                self._command(host),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout_s,
                text=True,
                shell=False,
            )
        except subprocess.TimeoutExpired as e:
            raise TransportError(f"inventory query timed out after {self.timeout_s}s") from e
        except OSError as e:
            raise TransportError(f"ssh unavailable: {e}") from e

        stderr = (proc.stderr or "").strip()

        if proc.returncode == 255:
            if "permission denied" in stderr.lower():
                raise AuthError(stderr)
            raise TransportError(stderr or "ssh connection failed")

        # df exits non-zero when a single mount is unreadable but still prints the rest
        if proc.returncode != 0 and not (proc.stdout or "").strip():
            if "not found" in stderr.lower():
                raise InventoryNotFoundError(stderr)
            raise TransportError(stderr or f"remote df exited with {proc.returncode}")

        return parse_df_output(proc.stdout or "")


def _local_names() -> set[str]:
    names = set(LOCAL_HOST_NAMES)
    try:
        hostname = socket.gethostname()
    except OSError:
        return names
    names.add(hostname.lower())
    names.add(hostname.split(".")[0].lower())
    return names


class RoutingInventory:
    """
    Pick the inventory transport per host
    """

    def __init__(
        self,
        local: InventoryService,
        remote: InventoryService,
        *,
        local_names: set[str] | None = None,
    ) -> None:
        self.local = local
        self.remote = remote
        self.local_names = _local_names() if local_names is None else local_names

    def list_fixed_disks(self, host: str) -> list[RawDisk]:
        if host.lower() in self.local_names:
            return self.local.list_fixed_disks(host)
        return self.remote.list_fixed_disks(host)
