import pytest

from easttle_scorer.charts import (
    DEFAULT_SCORING_CHART,
    EmptyChartError,
    InMemoryChartStore,
    InvalidChartError,
)
from easttle_scorer.conversion import lookup_scale_score, resolve_chart, year_expectation
from easttle_scorer.models import ScoringChart, ScoringChartEntry


def _chart(*rows: tuple[int, int, int, str]) -> ScoringChart:
    return ScoringChart(
        entries=tuple(ScoringChartEntry(*row) for row in rows),
        last_updated="2025-01-01T00:00:00+00:00",
        is_custom=True,
    )


SPARSE_CHART = _chart((10, 1000, 90, "1P"), (20, 1500, 70, "3B"), (30, 2000, 80, "5B"))


def test_default_chart_shape():
    """Default chart has 38 ascending rows from 1B to >6B."""
    entries = DEFAULT_SCORING_CHART.entries

    assert len(entries) == 38
    assert [e.total_score for e in entries] == list(range(7, 45))
    assert all(a.scale_score < b.scale_score for a, b in zip(entries, entries[1:]))
    assert entries[0].curriculum_level == "1B"
    assert entries[-1].curriculum_level == ">6B"
    assert not DEFAULT_SCORING_CHART.is_custom


def test_lookup_exact_minimum_row():
    """Total 7 returns the first default row."""
    assert lookup_scale_score(7) == ScoringChartEntry(7, 745, 134, "1B")


def test_lookup_below_range_keeps_query_total():
    """Totals below the chart clamp to the first row."""
    assert lookup_scale_score(6) == ScoringChartEntry(6, 745, 134, "1B")
    assert lookup_scale_score(0).total_score == 0


def test_lookup_above_range_keeps_query_total():
    """Totals above the chart clamp to the last row."""
    assert lookup_scale_score(50) == ScoringChartEntry(50, 1986, 119, ">6B")


def test_lookup_tabulated_middle_row():
    """Tabulated totals return their own row."""
    result = lookup_scale_score(21)

    assert (result.scale_score, result.error_margin, result.curriculum_level) == (
        1494,
        68,
        "3B",
    )


def test_lookup_between_rows_uses_lower_row():
    """Totals between rows take the nearest lower row."""
    assert lookup_scale_score(15, chart=SPARSE_CHART) == SPARSE_CHART.entries[0]
    assert lookup_scale_score(29, chart=SPARSE_CHART) == SPARSE_CHART.entries[1]
    assert lookup_scale_score(30, chart=SPARSE_CHART) == SPARSE_CHART.entries[2]


def test_lookup_is_monotonic_across_totals():
    """Scale scores never decrease as totals rise."""
    scales = [lookup_scale_score(total).scale_score for total in range(0, 57)]
    assert scales == sorted(scales)


def test_lookup_with_empty_chart_is_a_configuration_error():
    """An empty chart raises EmptyChartError."""
    empty = ScoringChart(entries=(), last_updated="", is_custom=True)
    with pytest.raises(EmptyChartError):
        lookup_scale_score(20, chart=empty)


def test_lookup_prefers_explicit_chart_then_store():
    """An explicit chart wins over the store's active chart."""
    store = InMemoryChartStore(SPARSE_CHART)

    assert lookup_scale_score(20, store=store).scale_score == 1500
    assert lookup_scale_score(20).scale_score == 1456
    assert resolve_chart(DEFAULT_SCORING_CHART, store) is DEFAULT_SCORING_CHART
    assert resolve_chart(store=store) is SPARSE_CHART


def test_year_expectation():
    """Curriculum levels map to year expectations."""
    assert year_expectation("2P") == "Year 3-4 expected"
    assert year_expectation(">6B") == "Above Year 11"
    assert year_expectation("9Z") == "Not specified"


def test_lookup_rejects_unsorted_explicit_chart():
    """A chart passed directly is validated before it is searched."""
    unsorted = _chart((20, 1500, 70, "3B"), (10, 1000, 90, "1P"))
    with pytest.raises(InvalidChartError):
        lookup_scale_score(15, chart=unsorted)
