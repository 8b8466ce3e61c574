from __future__ import annotations

from pathlib import Path

import yaml

SAMPLE_TEXT = "I like my cat. She is orange."

LONGER_TEXT = (
    "On Saturday we went to the beach with my family. The sand was hot, so we ran "
    "to the water.\n\n"
    "Then we built a huge castle because my brother wanted a moat. Finally, the "
    "waves came and washed it away!"
)


def write_config(tmp_path: Path, **overrides: object) -> Path:
    """Write a YAML config that keeps all CLI data inside tmp_path."""
    data = {"data_dir": str(tmp_path / "data")}
    data.update(overrides)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_path
