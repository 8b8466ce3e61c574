from __future__ import annotations

from .default import DEFAULT_SCORING_CHART
from .parser import (
    ChartParseError,
    ParsedScoringChart,
    build_chart_entries,
    load_chart_file,
    parse_chart_entries,
    parse_chart_text,
)
from .store import (
    ChartStore,
    EmptyChartError,
    InMemoryChartStore,
    InvalidChartError,
    JsonFileChartStore,
    validate_chart,
)

__all__ = [
    "DEFAULT_SCORING_CHART",
    "ChartParseError",
    "ParsedScoringChart",
    "build_chart_entries",
    "load_chart_file",
    "parse_chart_entries",
    "parse_chart_text",
    "ChartStore",
    "EmptyChartError",
    "InvalidChartError",
    "validate_chart",
    "InMemoryChartStore",
    "JsonFileChartStore",
]
