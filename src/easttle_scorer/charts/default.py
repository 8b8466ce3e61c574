from __future__ import annotations

from ..models import ScoringChart, ScoringChartEntry

# (total score, scale score aWs, error margin, curriculum level)
_DEFAULT_ROWS: tuple[tuple[int, int, int, str], ...] = (
    (7, 745, 134, "1B"),
    (8, 867, 124, "1B"),
    (9, 981, 114, "1B"),
    (10, 1085, 106, "1P"),
    (11, 1156, 98, "1P"),
    (12, 1208, 92, "1A"),
    (13, 1247, 87, "1A"),
    (14, 1279, 83, "2B"),
    (15, 1306, 80, "2B"),
    (16, 1330, 77, "2P"),
    (17, 1352, 75, "2P"),
    (18, 1374, 73, "2A"),
    (19, 1416, 71, "2A"),
    (20, 1456, 69, "2A"),
    (21, 1494, 68, "3B"),
    (22, 1521, 67, "3B"),
    (23, 1546, 66, "3P"),
    (24, 1569, 65, "3P"),
    (25, 1591, 65, "3A"),
    (26, 1612, 64, "3A"),
    (27, 1632, 64, "4B"),
    (28, 1652, 64, "4B"),
    (29, 1671, 64, "4P"),
    (30, 1690, 64, "4P"),
    (31, 1709, 65, "4A"),
    (32, 1728, 64, "4A"),
    (33, 1747, 66, "5B"),
    (34, 1766, 65, "5B"),
    (35, 1786, 67, "5P"),
    (36, 1806, 69, "5P"),
    (37, 1827, 68, "5A"),
    (38, 1849, 72, "5A"),
    (39, 1872, 75, "6B"),
    (40, 1896, 79, "6B"),
    (41, 1921, 84, "6B"),
    (42, 1946, 91, ">6B"),
    (43, 1966, 103, ">6B"),
    (44, 1986, 119, ">6B"),
)

DEFAULT_SCORING_CHART = ScoringChart(
    entries=tuple(
        ScoringChartEntry(
            total_score=total,
            scale_score=scale,
            error_margin=margin,
            curriculum_level=level,
        )
        for total, scale, margin, level in _DEFAULT_ROWS
    ),
    last_updated="2024-01-01T00:00:00+00:00",
    is_custom=False,
)
