"""
diskreport.collectors.probe
AUTHOR: carter-vin

Reachability prober
- one ICMP echo via the system `ping` command (no raw sockets needed)
- Windows: ping -n 1 -w <ms>
- macOS / FreeBSD: ping -c 1 -W <ms>
- Linux and others: ping -c 1 -W <sec>
- exactly one attempt per host
"""

from __future__ import annotations

import platform
import re
import subprocess
from typing import Callable

from diskreport.errors import TransportError

_TTL_RE = re.compile(r"ttl=\d+", re.IGNORECASE)

# Extra process-level slack on top of ping's own timeout
_PROCESS_SLACK_S = 1.5


def _wait_ms(timeout_s: float) -> str:
    return str(max(1, int(timeout_s * 1000)))


def build_ping_command(host: str, timeout_s: float, *, system: str) -> list[str]:
    """
    One echo request bounded by timeout_s

    -W is seconds on Linux but milliseconds on macOS and FreeBSD
    """
    if host.startswith("-"):
        raise ValueError(f"refusing host name that looks like an option: {host!r}")

    system = system.lower()
    if system.startswith("win"):
        return ["ping", "-n", "1", "-w", _wait_ms(timeout_s), host]
    if system in {"darwin", "freebsd"}:
        return ["ping", "-c", "1", "-W", _wait_ms(timeout_s), host]
    return ["ping", "-c", "1", "-W", str(max(1, int(timeout_s))), host]


class PingProber:
    """
    Reachability via system ping

    Failure semantics:
    - no reply / timeout -> False
    - ping binary missing or not executable -> TransportError
    - host name starting with "-" -> TransportError (never passed to ping)
    """

    def __init__(
        self,
        timeout_s: float = 1.0,
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        system: str | None = None,
    ) -> None:
        self.timeout_s = timeout_s
        self._runner = runner
        self._system = platform.system() if system is None else system

    def probe(self, host: str) -> bool:
        try:
            cmd = build_ping_command(host, self.timeout_s, system=self._system)
        except ValueError as e:
            raise TransportError(str(e)) from e

        try:
            proc = self._runner(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout_s + _PROCESS_SLACK_S,
                text=True,
                shell=False,
            )
        except subprocess.TimeoutExpired:
            return False
        except OSError as e:
            raise TransportError(f"ping unavailable: {e}") from e

        # Windows ping exits 0 on "Destination host unreachable"; require a TTL line
        return proc.returncode == 0 and bool(_TTL_RE.search(proc.stdout or ""))
