"""
Console rendering for batch outcomes.

One rich table per batch; the Dur cell turns red when a request took longer
than the notify threshold.
"""

import json
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from latency_probe.model import BatchOutcome, ResultRecord

# ========== UI Theme ==========
custom_theme = Theme({
    "ok":   "bold green",
    "slow": "bold red",
    "err":  "bold red",
    "info": "bold cyan",
})
console = Console(theme=custom_theme)


def dur_style(dur: float, notify_dur: float) -> str:
    return "slow" if dur > notify_dur else "ok"


def build_table(results: Iterable[ResultRecord], notify_dur: float) -> Table:
    table = Table(show_lines=True)
    table.add_column("URL", overflow="fold")
    table.add_column("Dur", justify="right")
    table.add_column("Status")
    table.add_column("Request", overflow="fold")
    for item in results:
        status = Text(item.status.value, style="ok" if item.ok else "err")
        if item.error:
            status.append(f"\n{item.error}", style="dim")
        table.add_row(
            Text(str(item.request.url)),
            Text(f"{item.dur:.6f}", style=dur_style(item.dur, notify_dur)),
            status,
            Text(json.dumps(item.request.as_dict(), indent=2, ensure_ascii=False)),
        )
    return table


def print_batch(
    title: str, outcome: BatchOutcome, notify_dur: float, out: Optional[Console] = None
) -> None:
    out = out or console
    out.rule(f"[info]{title}[/info]")
    out.print(build_table(outcome.results, notify_dur))
    slow = len(outcome.slow(notify_dur))
    out.print(
        f"Total Dur: {outcome.total:.6f}  "
        f"[ok]{outcome.succeeded} success[/ok]  [err]{outcome.failed} fail[/err]  "
        f"{slow} over {notify_dur}s"
    )
    out.rule()


def error_panel(title: str, msg: str, out: Optional[Console] = None) -> None:
    (out or console).print(Panel.fit(Text(msg, no_wrap=False), title=title, border_style="red"))
