"""
diskreport.targets
AUTHOR: carter-vin

Target resolution

Exactly one host source:
- explicit list of names
- text file, one name per line

Names are opaque (hostname, IP, "localhost"); only trimming and blank
filtering happens here. Duplicates are kept in order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from diskreport.errors import ConfigurationError, HostListNotFound


def _clean(names: Iterable[str]) -> list[str]:
    return [name.strip() for name in names if name and name.strip()]


def read_host_file(path: Path) -> list[str]:
    """
    Read host names from a file, dropping blank lines

    Raises HostListNotFound if the path does not exist, ConfigurationError
    if it cannot be read or is not UTF-8
    """
    if not path.is_file():
        raise HostListNotFound(path)

    try:
        # utf-8-sig tolerates files saved with a BOM
        contents = path.read_text(encoding="utf-8-sig")
    except (UnicodeDecodeError, OSError) as e:
        raise ConfigurationError(f"cannot read host list {path}: {e}") from e
    return _clean(contents.splitlines())


def resolve_targets(
    computer_names: Sequence[str] | None = None,
    computer_list_path: Path | str | None = None,
) -> list[str]:
    """
    Resolve the ordered host list from exactly one source

    Rules:
    - both sources given -> ConfigurationError
    - neither given (or explicit list empty) -> ConfigurationError
    - file source missing -> HostListNotFound
    - nothing left after trimming -> ConfigurationError
    """
    has_names = bool(computer_names)
    has_path = computer_list_path is not None and str(computer_list_path).strip() != ""

    if has_names and has_path:
        raise ConfigurationError("computer names and computer list path are mutually exclusive")
    if not has_names and not has_path:
        raise ConfigurationError("provide either computer names or a computer list path")

    if has_path:
        targets = read_host_file(Path(computer_list_path))
    else:
        targets = _clean(computer_names)

    if not targets:
        raise ConfigurationError("host source contains no host names")

    return targets
