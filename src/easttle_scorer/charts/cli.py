from __future__ import annotations

import json
from pathlib import Path

import click

from ..config import configure_logging, load_config
from ..conversion import year_expectation
from .parser import ChartParseError, load_chart_file
from .store import InvalidChartError, JsonFileChartStore


@click.group(name="chart")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file.",
)
@click.pass_context
def chart_group(ctx: click.Context, config_path: str | None) -> None:
    """Manage the raw score to scale score conversion chart."""
    cfg = load_config(config_path)
    configure_logging(cfg)
    ctx.obj = JsonFileChartStore(cfg.chart_path)


@chart_group.command("show")
@click.option("--json-output", "as_json", is_flag=True, default=False)
@click.pass_obj
def chart_show(store: JsonFileChartStore, as_json: bool) -> None:
    """Print the active chart."""
    chart = store.get_active_chart()
    if as_json:
        click.echo(json.dumps(chart.to_dict(), indent=2))
        return
    source = "custom" if chart.is_custom else "default"
    click.echo(f"Active chart: {source} ({len(chart.entries)} entries, updated {chart.last_updated})")
    for entry in chart.entries:
        click.echo(
            f"{entry.total_score:>3}  {entry.scale_score:>5} aWs  ±{entry.error_margin:<4}"
            f"{entry.curriculum_level:<4} {year_expectation(entry.curriculum_level)}"
        )


@chart_group.command("import")
@click.argument("chart_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def chart_import(store: JsonFileChartStore, chart_file: str) -> None:
    """Import a chart from a PDF, JSON or text file of rows like '7 745 134 1B'."""
    try:
        parsed = load_chart_file(Path(chart_file))
    except ChartParseError as exc:
        raise click.ClickException(str(exc)) from exc
    if not parsed.chart.is_custom:
        store.reset()
        click.echo("No chart rows found; using the default chart.", err=True)
        return
    try:
        store.set_custom_chart(parsed.chart)
    except InvalidChartError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Loaded {len(parsed.chart.entries)} score conversion entries.")


@chart_group.command("reset")
@click.pass_obj
def chart_reset(store: JsonFileChartStore) -> None:
    """Discard the custom chart and return to the default."""
    store.reset()
    click.echo("Using the default e-asTTle scoring chart.")


def main() -> None:
    chart_group()
