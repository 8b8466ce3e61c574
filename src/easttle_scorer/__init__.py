"""
easttle_scorer package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .analysis import analyze_text
from .charts import DEFAULT_SCORING_CHART, InMemoryChartStore, JsonFileChartStore
from .config import ScorerConfig, config_from_dict, config_from_yaml, load_config
from .conversion import lookup_scale_score
from .curriculum import curriculum_for_year
from .feedback import compose_feedback, normalize_feedback
from .pipeline import assess_text
from .scoring import CATEGORIES, score_writing

__all__ = [
    "ScorerConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "analyze_text",
    "score_writing",
    "CATEGORIES",
    "lookup_scale_score",
    "curriculum_for_year",
    "DEFAULT_SCORING_CHART",
    "InMemoryChartStore",
    "JsonFileChartStore",
    "compose_feedback",
    "normalize_feedback",
    "assess_text",
]

__version__ = "0.1.0"
