"""
Contract tests for host target resolution
"""

from pathlib import Path

import pytest

from diskreport.errors import ConfigurationError, HostListNotFound
from diskreport.targets import resolve_targets


def test_file_blank_lines_are_dropped(tmp_path: Path) -> None:
    """
    Blank and whitespace-only lines never become targets
    """
    hosts = tmp_path / "hosts.txt"
    hosts.write_text("A\n\n  \nB\n", encoding="utf-8")

    assert resolve_targets(computer_list_path=hosts) == ["A", "B"]


def test_file_entries_are_trimmed_and_duplicates_kept(tmp_path: Path) -> None:
    hosts = tmp_path / "hosts.txt"
    hosts.write_text("\ufeff  srv01 \nsrv02\r\nsrv01\n", encoding="utf-8")

    assert resolve_targets(computer_list_path=str(hosts)) == ["srv01", "srv02", "srv01"]


def test_explicit_list_preserves_order() -> None:
    assert resolve_targets(["b", " a ", "", "localhost"]) == ["b", "a", "localhost"]


def test_both_sources_rejected(tmp_path: Path) -> None:
    hosts = tmp_path / "hosts.txt"
    hosts.write_text("A\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="mutually exclusive"):
        resolve_targets(["A"], hosts)


@pytest.mark.parametrize("names", [None, []])
def test_neither_source_rejected(names) -> None:
    with pytest.raises(ConfigurationError):
        resolve_targets(names, None)


def test_missing_file_is_not_found(tmp_path: Path) -> None:
    """
    Missing host-list file is a NotFound-class configuration error
    """
    missing = tmp_path / "nope.txt"

    with pytest.raises(HostListNotFound) as excinfo:
        resolve_targets(computer_list_path=missing)

    assert isinstance(excinfo.value, ConfigurationError)
    assert excinfo.value.path == missing


def test_file_with_only_blank_lines_rejected(tmp_path: Path) -> None:
    hosts = tmp_path / "hosts.txt"
    hosts.write_text("\n   \n\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="no host names"):
        resolve_targets(computer_list_path=hosts)


def test_non_utf8_file_is_configuration_error(tmp_path: Path) -> None:
    """
    A Windows-1252 host list stops the run with a readable message
    """
    hosts = tmp_path / "hosts.txt"
    hosts.write_bytes(b"srv-caf\xe9\nB\n")

    with pytest.raises(ConfigurationError, match="cannot read host list"):
        resolve_targets(computer_list_path=hosts)


def test_unreadable_file_is_configuration_error(tmp_path: Path, monkeypatch) -> None:
    hosts = tmp_path / "hosts.txt"
    hosts.write_text("A\n", encoding="utf-8")

    def _deny(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_text", _deny)

    with pytest.raises(ConfigurationError, match="Permission denied"):
        resolve_targets(computer_list_path=hosts)
