"""
Command-line interface for the latency probe.

Example
-------
    latprobe --config config.json --time 0.5

Runs ``sync_list`` one request at a time, then fires all of ``async_list`` at
once, and prints a table per batch with slow requests flagged.
"""

from __future__ import annotations

import asyncio
import logging

import typer

from latency_probe.loader import ConfigError, load_config
from latency_probe.model import BatchMode, BatchOutcome, ProbeConfig
from latency_probe.report import console, error_panel, print_batch
from latency_probe.runner import DEFAULT_TIMEOUT, run_batch

# Typer application instance
app = typer.Typer(
    add_completion=False,
    help="Time a declarative list of HTTP requests, sequentially and concurrently.",
)


async def _run_both(cfg: ProbeConfig, timeout: float) -> tuple[BatchOutcome, BatchOutcome]:
    sync_outcome = await run_batch(BatchMode.SEQUENTIAL, cfg.sync_list, cfg.headers, timeout=timeout)
    async_outcome = await run_batch(BatchMode.CONCURRENT, cfg.async_list, cfg.headers, timeout=timeout)
    return sync_outcome, async_outcome


@app.command()
def run(
    config: str = typer.Option(
        "config.json", "--config", "-c", envvar="LATPROBE_CONFIG", help="Path to the JSON config file"
    ),
    time: float = typer.Option(
        0.8, "--time", "-t", help="Notify duration threshold in seconds"
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT, "--timeout", help="Per-request client timeout in seconds"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with code 1 if any request failed"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run both request lists and print the timing report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(config)
    except ConfigError as exc:
        error_panel("Config error", str(exc))
        raise typer.Exit(code=1)

    console.print("[info]Start Request Test[/info]")
    sync_outcome, async_outcome = asyncio.run(_run_both(cfg, timeout))

    print_batch("Sync results", sync_outcome, time)
    print_batch("Async results", async_outcome, time)

    if strict and (sync_outcome.failed or async_outcome.failed):
        raise typer.Exit(code=1)


# ``python -m latency_probe.cli`` entry-point

def main() -> None:  # pragma: no cover
    """Entry-point for the ``latprobe`` script."""
    app()


if __name__ == "__main__":
    app()
