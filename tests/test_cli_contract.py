"""
Contract tests for the diskreport CLI surface
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from diskreport import main as main_mod
from diskreport.collect import BYTES_PER_GB
from diskreport.collectors.base import RawDisk
from diskreport.main import app
from diskreport.read import read_report_csv


class FakeProber:
    def __init__(self, reachable) -> None:
        self.reachable = set(reachable)

    def probe(self, host: str) -> bool:
        return host in self.reachable


class FakeInventory:
    def list_fixed_disks(self, host: str) -> list[RawDisk]:
        return [
            RawDisk(
                device_id="C:",
                volume_name="OS",
                file_system="NTFS",
                total_bytes=100 * BYTES_PER_GB,
                free_bytes=40 * BYTES_PER_GB,
            )
        ]


@pytest.fixture
def fake_services(monkeypatch):
    seen = {}

    def _build(config):
        seen["config"] = config
        return FakeProber(reachable={"A"}), FakeInventory()

    monkeypatch.setattr(main_mod, "build_services", _build)
    return seen


@pytest.fixture
def no_services(monkeypatch):
    def _build(config):
        raise AssertionError("hosts must not be contacted on configuration errors")

    monkeypatch.setattr(main_mod, "build_services", _build)


def test_collect_writes_report_and_prints_path(fake_services) -> None:
    runner = CliRunner()

    with runner.isolated_filesystem():
        result = runner.invoke(
            app,
            ["collect", "-c", "B", "-c", "A", "--out-csv-path", "out/report.csv"],
        )

        assert result.exit_code == 0, result.output

        rows = read_report_csv(Path("out") / "report.csv")
        assert [(row["Server"], row["Status"]) for row in rows] == [("A", "OK"), ("B", "FAILED")]
        assert rows[0]["TotalGB"] == "100.00"
        assert rows[0]["UsedGB"] == "60.00"
        assert rows[0]["FreeGB"] == "40.00"
        assert rows[0]["PercentFree"] == "40.00"
        assert rows[1]["Error"] == "Ping failed"
        assert rows[1]["Drive"] == ""

        assert "Report written to:" in result.stdout
        assert str((Path("out") / "report.csv").resolve()) in result.stdout


def test_collect_default_output_name(fake_services) -> None:
    runner = CliRunner()

    with runner.isolated_filesystem():
        result = runner.invoke(app, ["collect", "--computer-name", "A"])

        assert result.exit_code == 0, result.output
        reports = list(Path.cwd().glob("DiskReport_*.csv"))
        assert len(reports) == 1
        assert fake_services["config"].out_csv_path is None


def test_collect_reads_host_file(fake_services) -> None:
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("hosts.txt").write_text("A\n\n  \nB\n", encoding="utf-8")
        result = runner.invoke(
            app,
            ["collect", "--computer-list-path", "hosts.txt", "-o", "r.csv"],
        )

        assert result.exit_code == 0, result.output
        rows = read_report_csv(Path("r.csv"))
        assert [row["Server"] for row in rows] == ["A", "B"]


def test_timeouts_flow_into_run_config(fake_services, monkeypatch) -> None:
    monkeypatch.setenv("DISKREPORT_QUERY_TIMEOUT", "7")
    runner = CliRunner()

    with runner.isolated_filesystem():
        result = runner.invoke(app, ["collect", "-c", "A", "--probe-timeout", "2.5", "-o", "r.csv"])

    assert result.exit_code == 0, result.output
    assert fake_services["config"].probe_timeout_s == 2.5
    assert fake_services["config"].query_timeout_s == 7


def test_both_sources_exit_2_without_contacting_hosts(no_services) -> None:
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("hosts.txt").write_text("A\n", encoding="utf-8")
        result = runner.invoke(
            app,
            ["collect", "-c", "A", "--computer-list-path", "hosts.txt"],
        )

        assert result.exit_code == 2
        assert "mutually exclusive" in result.output
        assert list(Path.cwd().glob("DiskReport_*.csv")) == []


def test_neither_source_exit_2(no_services) -> None:
    result = CliRunner().invoke(app, ["collect"])

    assert result.exit_code == 2
    assert "Error:" in result.output


def test_missing_host_file_exit_2(no_services) -> None:
    runner = CliRunner()

    with runner.isolated_filesystem():
        result = runner.invoke(app, ["collect", "-f", "missing.txt"])

    assert result.exit_code == 2
    assert "host list file not found" in result.output


def test_invalid_probe_timeout_exit_2(no_services) -> None:
    result = CliRunner().invoke(app, ["collect", "-c", "A", "--probe-timeout", "0"])

    assert result.exit_code == 2
    assert "probe timeout" in result.output


def test_unwritable_export_exit_1(fake_services) -> None:
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("blocker").write_text("", encoding="utf-8")
        result = runner.invoke(app, ["collect", "-c", "A", "-o", "blocker/report.csv"])

    assert result.exit_code == 1
    assert "could not write report" in result.output


def test_version_command() -> None:
    result = CliRunner().invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("diskreport v")


def test_non_utf8_host_file_exit_2(no_services) -> None:
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("hosts.txt").write_bytes(b"srv-caf\xe9\nB\n")
        result = runner.invoke(app, ["collect", "-f", "hosts.txt"])

    assert result.exit_code == 2
    assert "Error: cannot read host list" in result.output
