from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, TypedDict

import typer
import yaml

from .analysis import analyze_text
from .charts.store import JsonFileChartStore
from .config import ScorerConfig, configure_logging, load_config
from .conversion import lookup_scale_score, year_expectation
from .feedback import AUDIENCES, DEPTHS
from .pipeline import EmptySubmissionError, assess_text, build_result, render_report
from .scoring import score_analysis, total_score
from .storage import JsonFileAssessmentStore, assessment_to_dict

app = typer.Typer(help="e-asTTle writing scorer CLI.", no_args_is_help=True)


class ConversionPayload(TypedDict):
    totalScore: int
    scaleScore: int
    errorMargin: int
    curriculumLevel: str
    yearExpectation: str


class HistoryEntry(TypedDict):
    id: str
    timestamp: str
    studentName: str | None
    totalScore: int


@app.command()
def score(
    text: str | None = typer.Option(None, "--text", "-t", help="Writing sample text."),
    input_path: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Score a writing sample and print the analysis, scores and conversion as JSON."""
    cfg = _load(config)
    sample = _read_sample(text, input_path)
    analysis = analyze_text(sample)
    scores = score_analysis(analysis)
    total = total_score(scores)
    conversion = lookup_scale_score(total, store=_chart_store(cfg))
    payload: Dict[str, Any] = {
        "analysis": asdict(analysis),
        "scores": scores,
        "totalScore": total,
        "conversion": _conversion_dict(conversion.to_dict()),
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def assess(
    text: str | None = typer.Option(None, "--text", "-t", help="Writing sample text."),
    input_path: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    student_name: str | None = typer.Option(None, "--student-name", "-s"),
    year_level: int | None = typer.Option(None, "--year-level", "-y", min=0, max=13),
    audience: str | None = typer.Option(
        None, "--audience", "-a", help="Feedback audience: student, teacher or parent."
    ),
    depth: str | None = typer.Option(
        None, "--depth", "-d", help="Feedback depth: simple, standard or comprehensive."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the stored record as JSON."),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Assess a writing sample, save it to history and print a report."""
    cfg = _load(config)
    audience, depth = _feedback_selection(cfg, audience, depth)
    sample = _read_sample(text, input_path)
    try:
        result = assess_text(
            sample,
            chart_store=_chart_store(cfg),
            assessment_store=_assessment_store(cfg),
            student_name=student_name,
            year_level=year_level,
        )
    except EmptySubmissionError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if as_json:
        payload = assessment_to_dict(result.assessment)
        payload["conversion"] = _conversion_dict(result.conversion.to_dict())
        typer.echo(json.dumps(payload, indent=2))
        return
    typer.echo(render_report(result, audience, depth))


@app.command()
def history(config: Path | None = typer.Option(None, "--config", "-c")) -> None:
    """List saved assessments, newest first."""
    cfg = _load(config)
    entries: List[HistoryEntry] = [
        {
            "id": item.id,
            "timestamp": item.timestamp,
            "studentName": item.student_name,
            "totalScore": total_score(item.scores),
        }
        for item in _assessment_store(cfg).list()
    ]
    typer.echo(json.dumps({"assessments": entries}, indent=2))


@app.command()
def show(
    assessment_id: str = typer.Argument(..., help="Assessment id from `history`."),
    audience: str | None = typer.Option(None, "--audience", "-a"),
    depth: str | None = typer.Option(None, "--depth", "-d"),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Print the report for a saved assessment."""
    cfg = _load(config)
    audience, depth = _feedback_selection(cfg, audience, depth)
    assessment = _assessment_store(cfg).get(assessment_id)
    if assessment is None:
        raise typer.BadParameter(f"No assessment with id '{assessment_id}'.")
    typer.echo(render_report(build_result(assessment, _chart_store(cfg)), audience, depth))


@app.command()
def clear(config: Path | None = typer.Option(None, "--config", "-c")) -> None:
    """Delete all saved assessments."""
    cfg = _load(config)
    _assessment_store(cfg).clear()
    typer.echo("Cleared saved assessments.")


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = ScorerConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _load(config: Path | None) -> ScorerConfig:
    """Load configuration and apply its log level."""
    cfg = load_config(config)
    configure_logging(cfg)
    return cfg


def _read_sample(text: str | None, input_path: Path | None) -> str:
    """Return the writing sample from exactly one of --text or --input-path."""
    if (text is None) == (input_path is None):
        raise typer.BadParameter("Provide exactly one of --text or --input-path.")
    if input_path is not None:
        return input_path.read_text(encoding="utf-8")
    return text or ""


def _feedback_selection(
    cfg: ScorerConfig, audience: str | None, depth: str | None
) -> tuple[str, str]:
    audience = (audience or cfg.feedback.audience).lower()
    depth = (depth or cfg.feedback.depth).lower()
    if audience not in AUDIENCES:
        raise typer.BadParameter(f"Audience must be one of {', '.join(AUDIENCES)}.")
    if depth not in DEPTHS:
        raise typer.BadParameter(f"Depth must be one of {', '.join(DEPTHS)}.")
    return audience, depth


def _chart_store(cfg: ScorerConfig) -> JsonFileChartStore:
    return JsonFileChartStore(cfg.chart_path)


def _assessment_store(cfg: ScorerConfig) -> JsonFileAssessmentStore:
    return JsonFileAssessmentStore(cfg.assessments_path, cfg.max_assessments)


def _conversion_dict(data: Dict[str, Any]) -> ConversionPayload:
    return {
        "totalScore": data["totalScore"],
        "scaleScore": data["scaleScore"],
        "errorMargin": data["errorMargin"],
        "curriculumLevel": data["curriculumLevel"],
        "yearExpectation": year_expectation(data["curriculumLevel"]),
    }


if __name__ == "__main__":
    main()
