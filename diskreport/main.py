"""
diskreport.main
------------
AUTHOR: carter-vin

PURPOSE:
- Collect fixed-disk capacity from a list of hosts
- Print a compact table for the operator
- Write the full record set (errors included) to CSV

Key contract:
- `diskreport --help` shows a Commands section.
- configuration errors exit 2 before any host is contacted
- per-host failures never change the exit code
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import typer

from diskreport import __version__
from diskreport.collect import build_services, collect_all
from diskreport.config import DEFAULT_PROBE_TIMEOUT_S, DEFAULT_QUERY_TIMEOUT_S, RunConfig
from diskreport.emit import default_report_path, write_report_csv
from diskreport.errors import ConfigurationError
from diskreport.logging import emit_event
from diskreport.model import Status, sort_records
from diskreport.render import render_table
from diskreport.targets import resolve_targets

# Explicit multi-command CLI
app = typer.Typer(
    add_completion=False,
    help="diskreport: fixed-disk capacity report across hosts",
)


# -----------------------------
# DATA CLASSES
# -----------------------------
@dataclass(frozen=True)
class EnvironmentInfo:
    """
    Snapshot of the runtime environment
    """

    python_version: str
    os: str
    machine: str
    utc_now: str


def collect_environment_info() -> EnvironmentInfo:
    return EnvironmentInfo(
        python_version=sys.version.split()[0],
        os=f"{platform.system()} {platform.release()}",
        machine=platform.machine(),
        utc_now=datetime.now(timezone.utc).isoformat(),
    )


# -----------------------------
# ROOT COMMAND BEHAVIOR
# -----------------------------
@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """
    Root command behavior.

    If no subcommand is provided, print a short hint and exit 0.
    """
    if ctx.invoked_subcommand is None:
        typer.echo("No command provided. Try: diskreport --help")


# -----------------------------
# CLI COMMANDS
# -----------------------------
@app.command()
def version() -> None:
    """
    Print tool version & runtime env
    """
    env = collect_environment_info()

    typer.echo(f"diskreport v{__version__}")
    typer.echo(f"python={env.python_version}")
    typer.echo(f"os={env.os}")
    typer.echo(f"machine={env.machine}")
    typer.echo(f"utc_now={env.utc_now}")


@app.command("collect")
def collect(
    computer_name: list[str] | None = typer.Option(
        None,
        "--computer-name",
        "-c",
        help="Host to query (repeatable). Mutually exclusive with --computer-list-path.",
    ),
    computer_list_path: str | None = typer.Option(
        None,
        "--computer-list-path",
        "-f",
        help="Text file with one host name per line.",
    ),
    out_csv_path: str | None = typer.Option(
        None,
        "--out-csv-path",
        "-o",
        help="CSV output path (default: DiskReport_<timestamp>.csv in the current directory).",
    ),
    probe_timeout: float = typer.Option(
        DEFAULT_PROBE_TIMEOUT_S,
        "--probe-timeout",
        envvar="DISKREPORT_PROBE_TIMEOUT",
        help="Reachability probe timeout (seconds).",
    ),
    query_timeout: int = typer.Option(
        DEFAULT_QUERY_TIMEOUT_S,
        "--query-timeout",
        envvar="DISKREPORT_QUERY_TIMEOUT",
        help="Inventory query timeout (seconds).",
    ),
) -> None:
    """
    Query every host once and emit the report

    Failure semantics:
    - bad/missing/conflicting host source -> exit 2, nothing contacted
    - export write failure -> exit 1
    """
    emit_event("run_start", tool_version=__version__)

    try:
        try:
            config = RunConfig(
                probe_timeout_s=probe_timeout,
                query_timeout_s=query_timeout,
                out_csv_path=Path(out_csv_path) if out_csv_path else None,
            )
            targets = resolve_targets(computer_name, computer_list_path)
        except ConfigurationError as e:
            emit_event(
                "config_error",
                tool_version=__version__,
                error_type=type(e).__name__,
                message=str(e),
            )
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=2)

        prober, inventory = build_services(config)
        records = collect_all(targets, prober=prober, inventory=inventory)
        ordered = sort_records(records)

        typer.echo(render_table(ordered))

        failed_hosts = {record.server for record in ordered if record.status is Status.FAILED}
        typer.echo(f"\nhosts: {len(targets)}  records: {len(ordered)}  failed_hosts: {len(failed_hosts)}")

        out_path = config.out_csv_path or default_report_path()

        def _on_write_error(e: Exception, path: Path) -> None:
            emit_event(
                "report_write_failed",
                tool_version=__version__,
                path=str(path),
                error_type=type(e).__name__,
                message=str(e),
            )

        try:
            written = write_report_csv(ordered, out_path, on_write_error=_on_write_error)
        except OSError as e:
            typer.echo(f"Error: could not write report: {e}", err=True)
            raise typer.Exit(code=1)

        emit_event(
            "report_written",
            tool_version=__version__,
            path=str(written),
            records=len(ordered),
        )
        typer.echo(f"Report written to: {written}")

    finally:
        emit_event("run_shutdown", tool_version=__version__)


if __name__ == "__main__":
    app()
