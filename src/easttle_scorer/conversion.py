from __future__ import annotations

from dataclasses import replace

from .charts.default import DEFAULT_SCORING_CHART
from .charts.store import ChartStore, validate_chart
from .models import ScoringChart, ScoringChartEntry

YEAR_EXPECTATIONS: dict[str, str] = {
    "1B": "Year 1 beginning",
    "1P": "Year 1-2 expected",
    "1A": "Year 2 expected",
    "2B": "Year 2-3 expected",
    "2P": "Year 3-4 expected",
    "2A": "Year 4 expected",
    "3B": "Year 4-5 expected",
    "3P": "Year 5-6 expected",
    "3A": "Year 6 expected",
    "4B": "Year 6-7 expected",
    "4P": "Year 7-8 expected",
    "4A": "Year 8 expected",
    "5B": "Year 8-9 expected",
    "5P": "Year 9-10 expected",
    "5A": "Year 10 expected",
    "6B": "Year 10-11 expected",
    ">6B": "Above Year 11",
}


def resolve_chart(
    chart: ScoringChart | None = None, store: ChartStore | None = None
) -> ScoringChart:
    """Pick the explicit chart, then the store's active chart, then the default."""
    if chart is not None:
        return chart
    if store is not None:
        return store.get_active_chart()
    return DEFAULT_SCORING_CHART


def lookup_scale_score(
    total_score: int,
    chart: ScoringChart | None = None,
    store: ChartStore | None = None,
) -> ScoringChartEntry:
    """
    Convert a raw total into scale score, error margin and curriculum level.

    Totals outside the table are clamped to the first or last row (keeping the
    queried total). Totals between rows map to the nearest lower row; there is
    no interpolation.
    """
    active = resolve_chart(chart, store)
    validate_chart(active)
    entries = active.entries

    closest: ScoringChartEntry | None = None
    for entry in entries:
        if entry.total_score == total_score:
            return entry
        if entry.total_score <= total_score:
            closest = entry

    if total_score < entries[0].total_score:
        return replace(entries[0], total_score=total_score)
    if total_score > entries[-1].total_score:
        return replace(entries[-1], total_score=total_score)
    return closest if closest is not None else entries[0]


def year_expectation(curriculum_level: str) -> str:
    """Describe which NZ year group a curriculum level is typical for."""
    return YEAR_EXPECTATIONS.get(curriculum_level, "Not specified")
