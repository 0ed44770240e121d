"""
diskreport.config
AUTHOR: carter-vin

Explicit run configuration

Everything the collection routine needs is passed in through RunConfig,
never read from process-wide state.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from diskreport.errors import ConfigurationError

DEFAULT_PROBE_TIMEOUT_S = 1.0
DEFAULT_QUERY_TIMEOUT_S = 30


@dataclass(frozen=True)
class RunConfig:
    """
    Settings for one run
    - probe_timeout_s: reachability probe bound (seconds)
    - query_timeout_s: inventory query bound (seconds)
    - out_csv_path: export path; None -> timestamped name in cwd
    """

    probe_timeout_s: float = DEFAULT_PROBE_TIMEOUT_S
    query_timeout_s: int = DEFAULT_QUERY_TIMEOUT_S
    out_csv_path: Path | None = None

    def __post_init__(self) -> None:
        if self.probe_timeout_s <= 0:
            raise ConfigurationError("probe timeout must be > 0")
        if self.query_timeout_s <= 0:
            raise ConfigurationError("query timeout must be > 0")
