"""Configuration model for AdaptQuiz."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr


def default_data_dir() -> Path:
    home = os.environ.get("ADAPTQUIZ_HOME")
    return Path(home) if home else Path.home() / ".adaptquiz"


class Settings(BaseModel):
    session_length: int = Field(default=6, ge=1)
    feedback_delay_seconds: float = Field(default=0.7, ge=0)
    catalog: str = "speed_distance"
    catalogs_dir: Optional[Path] = None
    data_dir: Path = Field(default_factory=default_data_dir)
    log_level: str = "WARNING"

    # File the settings were loaded from; save() writes back to it.
    _source: Optional[Path] = PrivateAttr(default=None)

    @property
    def config_path(self) -> Path:
        return self._source or self.data_dir / "config.yaml"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        config_path = path or default_data_dir() / "config.yaml"
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            settings = cls(**data)
        else:
            settings = cls()
        settings._source = config_path
        return settings

    def save(self) -> None:
        config_path = self.config_path
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
