from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class FeedbackSettings:
    """Which feedback cell the CLI prints by default."""

    audience: str = "teacher"
    depth: str = "standard"


@dataclass(slots=True)
class ScorerConfig:
    """Configuration options for scoring, storage and reporting."""

    data_dir: str = ".easttle"
    assessments_filename: str = "assessments.json"
    chart_filename: str = "scoring_chart.json"
    max_assessments: int = 10
    log_level: str = "WARNING"
    feedback: FeedbackSettings = field(default_factory=FeedbackSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))

    @property
    def assessments_path(self) -> Path:
        return Path(self.data_dir) / self.assessments_filename

    @property
    def chart_path(self) -> Path:
        return Path(self.data_dir) / self.chart_filename


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(ScorerConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "feedback" in data:
        feedback_value = data["feedback"]
        if isinstance(feedback_value, FeedbackSettings):
            kwargs["feedback"] = feedback_value
        elif isinstance(feedback_value, Mapping):
            kwargs["feedback"] = _build_feedback_settings(feedback_value)
        else:
            kwargs.pop("feedback")
    return kwargs


def _build_feedback_settings(data: Mapping[str, Any]) -> FeedbackSettings:
    feedback_allowed = {field.name for field in fields(FeedbackSettings)}
    filtered = {key: data[key] for key in data if key in feedback_allowed}
    return FeedbackSettings(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> ScorerConfig:
    """Build a ScorerConfig from a dictionary-like input."""
    if data is None:
        return ScorerConfig()
    return ScorerConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> ScorerConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> ScorerConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return ScorerConfig()
    return config_from_yaml(path)


def configure_logging(config: ScorerConfig) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
