import json
import logging
import threading
from pathlib import Path

import pytest

from easttle_scorer.charts import (
    DEFAULT_SCORING_CHART,
    ChartParseError,
    EmptyChartError,
    InMemoryChartStore,
    InvalidChartError,
    JsonFileChartStore,
    load_chart_file,
    parse_chart_entries,
    parse_chart_text,
)
from easttle_scorer.charts.parser import extract_pdf_text
from easttle_scorer.conversion import lookup_scale_score
from easttle_scorer.models import ScoringChart, ScoringChartEntry

CHART_TEXT = """
Total  Scale  Error  Level
7 745 134 1B
8 867 124 1b
44 1986 119 >6B
"""


def test_parse_chart_entries_reads_rows():
    """Chart rows are read and levels uppercased."""
    entries = parse_chart_entries(CHART_TEXT)

    assert [e.total_score for e in entries] == [7, 8, 44]
    assert entries[1].curriculum_level == "1B"
    assert entries[2] == ScoringChartEntry(44, 1986, 119, ">6B")


def test_parse_chart_entries_rejects_out_of_bounds_rows():
    """Rows outside the total and scale bounds are dropped."""
    text = "5 745 134 1B\n57 2000 10 6B\n20 600 50 2A\n20 2600 50 2A\n21 1494 68 3B"

    entries = parse_chart_entries(text)

    assert entries == [ScoringChartEntry(21, 1494, 68, "3B")]


def test_parse_chart_entries_sorts_and_keeps_first_duplicate():
    """Rows are sorted and the first duplicate total wins."""
    text = "21 1494 68 3B\n9 981 114 1B\n21 1500 70 3P"

    entries = parse_chart_entries(text)

    assert [e.total_score for e in entries] == [9, 21]
    assert entries[1].scale_score == 1494


def test_parse_chart_text_marks_custom_chart():
    """Parsed rows produce a custom chart."""
    parsed = parse_chart_text(CHART_TEXT)

    assert parsed.chart.is_custom
    assert len(parsed.chart.entries) == 3
    assert parsed.raw_text == CHART_TEXT


def test_parse_chart_text_falls_back_to_default():
    """Text without rows falls back to the default chart."""
    parsed = parse_chart_text("This PDF has no table in it.")

    assert not parsed.chart.is_custom
    assert parsed.chart.entries == DEFAULT_SCORING_CHART.entries


def test_load_chart_file_text_and_json(tmp_path: Path):
    """Text and serialised JSON charts both load."""
    text_file = tmp_path / "chart.txt"
    text_file.write_text(CHART_TEXT, encoding="utf-8")
    json_file = tmp_path / "chart.json"
    json_file.write_text(json.dumps(DEFAULT_SCORING_CHART.to_dict()), encoding="utf-8")

    from_text = load_chart_file(text_file)
    from_json = load_chart_file(json_file)

    assert len(from_text.chart.entries) == 3
    assert from_json.chart.is_custom
    assert from_json.chart.entries == DEFAULT_SCORING_CHART.entries


def test_load_chart_file_rejects_bad_json(tmp_path: Path):
    """Invalid JSON raises ChartParseError."""
    bad = tmp_path / "chart.json"
    bad.write_text("{not json", encoding="utf-8")

    with pytest.raises(ChartParseError):
        load_chart_file(bad)


def test_extract_pdf_text_missing_file(tmp_path: Path):
    """A missing PDF raises ChartParseError."""
    with pytest.raises(ChartParseError):
        extract_pdf_text(tmp_path / "missing.pdf")


def test_in_memory_store_set_and_reset():
    """Custom charts replace the default until reset."""
    store = InMemoryChartStore()
    custom = parse_chart_text(CHART_TEXT).chart

    assert store.get_active_chart() is DEFAULT_SCORING_CHART
    store.set_custom_chart(custom)
    assert store.has_custom_chart()
    assert store.get_active_chart() is custom
    store.reset()
    assert not store.has_custom_chart()


def test_store_rejects_empty_chart(tmp_path: Path):
    """Both stores refuse to activate an empty chart."""
    empty = ScoringChart(entries=(), last_updated="", is_custom=True)

    with pytest.raises(EmptyChartError):
        InMemoryChartStore().set_custom_chart(empty)
    with pytest.raises(EmptyChartError):
        JsonFileChartStore(tmp_path / "chart.json").set_custom_chart(empty)


def test_json_file_store_persists_between_instances(tmp_path: Path):
    """The JSON store survives reopening and reset removes the file."""
    path = tmp_path / "nested" / "chart.json"
    custom = parse_chart_text(CHART_TEXT).chart

    JsonFileChartStore(path).set_custom_chart(custom)
    reopened = JsonFileChartStore(path)

    assert reopened.get_active_chart() == custom
    reopened.reset()
    assert not path.exists()
    assert reopened.get_active_chart() is DEFAULT_SCORING_CHART


def test_lookups_see_a_whole_chart_during_updates():
    """Concurrent lookups never see a half-swapped chart."""
    store = InMemoryChartStore()
    low = ScoringChart(
        entries=tuple(ScoringChartEntry(t, 1000 + t, 50, "2B") for t in range(7, 57)),
        last_updated="",
        is_custom=True,
    )
    high = ScoringChart(
        entries=tuple(ScoringChartEntry(t, 2000 + t, 60, "5B") for t in range(7, 57)),
        last_updated="",
        is_custom=True,
    )
    errors: list[str] = []

    def writer() -> None:
        for i in range(200):
            store.set_custom_chart(low if i % 2 else high)

    def reader() -> None:
        for _ in range(200):
            result = lookup_scale_score(30, store=store)
            if (result.scale_score, result.error_margin) not in {
                (1030, 50),
                (2030, 60),
                (1690, 64),
            }:
                errors.append(repr(result))

    threads = [threading.Thread(target=writer)] + [
        threading.Thread(target=reader) for _ in range(4)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []


def test_load_chart_file_accepts_bare_row_list(tmp_path: Path):
    """A JSON array of row objects imports like a serialised chart."""
    rows = [entry.to_dict() for entry in DEFAULT_SCORING_CHART.entries[:3]]
    path = tmp_path / "rows.json"
    path.write_text(json.dumps(list(reversed(rows))), encoding="utf-8")

    parsed = load_chart_file(path)

    assert parsed.chart.is_custom
    assert parsed.chart.entries == DEFAULT_SCORING_CHART.entries[:3]


@pytest.mark.parametrize(
    "payload",
    [
        [{"totalScore": 7, "scaleScore": 745, "errorMargin": 134}],
        [{"totalScore": "seven", "scaleScore": 745, "errorMargin": 134, "curriculumLevel": "1B"}],
        [[7, 745, 134, "1B"]],
        {"entries": "7 745 134 1B"},
        42,
    ],
)
def test_load_chart_file_reports_malformed_json_rows(tmp_path: Path, payload: object):
    """Malformed JSON rows surface as ChartParseError."""
    path = tmp_path / "rows.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ChartParseError):
        load_chart_file(path)


@pytest.mark.parametrize(
    "rows",
    [
        ((20, 1500, 70, "3B"), (10, 1000, 90, "1P")),
        ((10, 1000, 90, "1P"), (10, 1100, 90, "1A")),
        ((10, 1000, 90, "1P"), (20, 1000, 70, "3B")),
        ((10, 1000, 90, "1P"), (20, 900, 70, "3B")),
    ],
)
def test_stores_reject_out_of_order_charts(tmp_path: Path, rows):
    """Only strictly ascending charts can become active."""
    chart = ScoringChart(
        entries=tuple(ScoringChartEntry(*row) for row in rows),
        last_updated="",
        is_custom=True,
    )

    with pytest.raises(InvalidChartError):
        InMemoryChartStore(chart)
    with pytest.raises(InvalidChartError):
        JsonFileChartStore(tmp_path / "chart.json").set_custom_chart(chart)
    assert not (tmp_path / "chart.json").exists()


@pytest.mark.parametrize(
    "contents",
    [
        "{truncated",
        "[1, 2, 3]",
        '{"entries": [{"totalScore": 7}]}',
        json.dumps(
            {
                "entries": [
                    {"totalScore": 20, "scaleScore": 1500, "errorMargin": 70, "curriculumLevel": "3B"},
                    {"totalScore": 10, "scaleScore": 1000, "errorMargin": 90, "curriculumLevel": "1P"},
                ],
                "isCustom": True,
            }
        ),
    ],
)
def test_json_file_store_falls_back_on_unusable_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, contents: str
):
    """A corrupt stored chart logs a warning and the default chart stays usable."""
    path = tmp_path / "chart.json"
    path.write_text(contents, encoding="utf-8")
    store = JsonFileChartStore(path)

    with caplog.at_level(logging.WARNING, logger="easttle_scorer.charts.store"):
        active = store.get_active_chart()
        result = lookup_scale_score(20, store=store)

    assert active is DEFAULT_SCORING_CHART
    assert result.scale_score == 1456
    assert "Ignoring unusable chart" in caplog.text
