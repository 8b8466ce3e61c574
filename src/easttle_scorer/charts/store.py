from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from ..models import ScoringChart
from .default import DEFAULT_SCORING_CHART

logger = logging.getLogger(__name__)


class InvalidChartError(ValueError):
    """Raised when a chart's rows cannot serve as a step-function lookup."""


class EmptyChartError(InvalidChartError):
    """Raised when a chart with no entries is used or activated."""


class ChartStore(ABC):
    """Holds the active conversion chart: a custom upload or the default."""

    @abstractmethod
    def get_active_chart(self) -> ScoringChart:
        """Return the custom chart when one is set, otherwise the default."""
        raise NotImplementedError

    @abstractmethod
    def set_custom_chart(self, chart: ScoringChart) -> None:
        """Replace any previous custom chart."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Forget the custom chart so the default becomes active."""
        raise NotImplementedError

    def has_custom_chart(self) -> bool:
        return self.get_active_chart().is_custom


class InMemoryChartStore(ChartStore):
    """Process-local chart store; the active chart is swapped atomically."""

    def __init__(self, chart: ScoringChart | None = None) -> None:
        self._lock = threading.Lock()
        self._custom: ScoringChart | None = None
        if chart is not None:
            self.set_custom_chart(chart)

    def get_active_chart(self) -> ScoringChart:
        with self._lock:
            return self._custom or DEFAULT_SCORING_CHART

    def set_custom_chart(self, chart: ScoringChart) -> None:
        validate_chart(chart)
        with self._lock:
            self._custom = chart

    def reset(self) -> None:
        with self._lock:
            self._custom = None


class JsonFileChartStore(ChartStore):
    """Persist the custom chart as a JSON document on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get_active_chart(self) -> ScoringChart:
        with self._lock:
            if not self._path.exists():
                return DEFAULT_SCORING_CHART
            contents = self._path.read_text(encoding="utf-8")
        try:
            chart = ScoringChart.from_dict(json.loads(contents))
            validate_chart(chart)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Ignoring unusable chart at %s (%s); using default.", self._path, exc)
            return DEFAULT_SCORING_CHART
        return chart

    def set_custom_chart(self, chart: ScoringChart) -> None:
        validate_chart(chart)
        payload = json.dumps(chart.to_dict(), indent=2)
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self._path)
        logger.info("Saved scoring chart with %d entries to %s", len(chart.entries), self._path)

    def reset(self) -> None:
        with self._lock:
            if self._path.exists():
                self._path.unlink()
                logger.info("Removed custom scoring chart %s", self._path)


def validate_chart(chart: ScoringChart) -> None:
    """Reject charts that are empty or not strictly ascending in both scores."""
    if not chart.entries:
        raise EmptyChartError("Cannot activate a scoring chart with no entries.")
    for previous, current in zip(chart.entries, chart.entries[1:]):
        if current.total_score <= previous.total_score:
            raise InvalidChartError(
                f"Total scores must be unique and ascending: {current.total_score} "
                f"follows {previous.total_score}."
            )
        if current.scale_score <= previous.scale_score:
            raise InvalidChartError(
                f"Scale scores must increase: total {current.total_score} has "
                f"{current.scale_score} after {previous.scale_score}."
            )
