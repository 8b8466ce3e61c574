from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List

from ..models import ScoringChart, ScoringChartEntry
from .default import DEFAULT_SCORING_CHART

logger = logging.getLogger(__name__)

# Rows such as "7 745 134 1B" or "42 1946 91 >6B".
ROW_RE = re.compile(r"(\d+)\s+(\d+)\s+(\d+)\s+(>?\d[BPA])", re.IGNORECASE)

MIN_TOTAL_SCORE = 7
MAX_TOTAL_SCORE = 56
MIN_SCALE_SCORE = 700
MAX_SCALE_SCORE = 2500


class ChartParseError(RuntimeError):
    """Raised when a chart source file cannot be read."""


@dataclass(slots=True)
class ParsedScoringChart:
    """A chart built from imported text plus the text it came from."""

    chart: ScoringChart
    raw_text: str


def parse_chart_entries(text: str) -> List[ScoringChartEntry]:
    """Extract, validate, sort and deduplicate chart rows found in ``text``."""
    rows = [
        ScoringChartEntry(
            total_score=int(match.group(1)),
            scale_score=int(match.group(2)),
            error_margin=int(match.group(3)),
            curriculum_level=match.group(4).upper(),
        )
        for match in ROW_RE.finditer(text)
    ]
    return build_chart_entries(rows)


def build_chart_entries(rows: Iterable[ScoringChartEntry]) -> List[ScoringChartEntry]:
    """Drop out-of-bounds rows, sort by total score and keep the first duplicate."""
    valid = [row for row in rows if _within_bounds(row)]
    valid.sort(key=lambda row: row.total_score)
    seen: set[int] = set()
    unique: List[ScoringChartEntry] = []
    for row in valid:
        if row.total_score in seen:
            continue
        seen.add(row.total_score)
        unique.append(row)
    return unique


def parse_chart_text(text: str) -> ParsedScoringChart:
    """Build a custom chart from text, falling back to the default chart."""
    entries = parse_chart_entries(text)
    if not entries:
        logger.warning("Could not parse any chart rows; using the default chart.")
        return ParsedScoringChart(
            chart=replace(DEFAULT_SCORING_CHART, last_updated=_now_iso(), is_custom=False),
            raw_text=text,
        )
    logger.info("Parsed %d scoring chart entries", len(entries))
    return ParsedScoringChart(
        chart=ScoringChart(entries=tuple(entries), last_updated=_now_iso(), is_custom=True),
        raw_text=text,
    )


def load_chart_file(path: Path) -> ParsedScoringChart:
    """Read a chart from a PDF, a serialised JSON chart or plain text."""
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return parse_chart_text(extract_pdf_text(path))
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ChartParseError(f"Unable to read chart file {path}: {exc}") from exc
    if suffix == ".json":
        try:
            data = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise ChartParseError(f"Invalid chart JSON in {path}: {exc}") from exc
        entries = build_chart_entries(_json_rows(data, path))
        if not entries:
            return parse_chart_text("")
        return ParsedScoringChart(
            chart=ScoringChart(entries=tuple(entries), last_updated=_now_iso(), is_custom=True),
            raw_text=contents,
        )
    return parse_chart_text(contents)


def extract_pdf_text(path: Path) -> str:
    """Return the text of every page in a PDF, one page per line block."""
    if not path.exists():
        raise ChartParseError(f"PDF file not found: {path}")
    import fitz  # type: ignore

    try:
        with fitz.open(path) as doc:
            pages = [doc.load_page(idx).get_text("text") for idx in range(doc.page_count)]
    except (RuntimeError, ValueError) as exc:
        raise ChartParseError(f"Unable to read PDF {path}: {exc}") from exc
    text = "\n".join(pages)
    logger.debug("Extracted %d characters from %s", len(text), path)
    return text


def _json_rows(data: Any, path: Path) -> List[ScoringChartEntry]:
    """Accept a bare list of rows or a serialised chart with an ``entries`` list."""
    items = data.get("entries", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ChartParseError(f"Chart JSON in {path} must be a list of rows or a chart object.")
    try:
        return [ScoringChartEntry.from_dict(item) for item in items]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ChartParseError(f"Malformed chart row in {path}: {exc!r}") from exc


def _within_bounds(row: ScoringChartEntry) -> bool:
    return (
        MIN_TOTAL_SCORE <= row.total_score <= MAX_TOTAL_SCORE
        and MIN_SCALE_SCORE <= row.scale_score <= MAX_SCALE_SCORE
    )


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
