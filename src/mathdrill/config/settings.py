"""Configuration model for mathdrill."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from mathdrill.engine.tiers import DifficultyTier


class DifficultyConfig(BaseModel):
    correct_to_level_up: int = Field(default=4, ge=1)
    wrong_to_level_down: int = Field(default=2, ge=1)
    easy_after_level_up: int = Field(default=2, ge=0)
    easy_after_level_down: int = Field(default=2, ge=0)
    starting_tier: DifficultyTier = DifficultyTier.BEGINNER


class TimingConfig(BaseModel):
    check_delay: float = Field(default=0.6, ge=0)
    reset_delay: float = Field(default=1.0, ge=0)


class Settings(BaseModel):
    difficulty: DifficultyConfig = Field(default_factory=DifficultyConfig)
    timing: TimingConfig = Field(default_factory=TimingConfig)
    max_answer_digits: int = Field(default=5, ge=1)
    auto_check: bool = True
    seed: Optional[int] = None
    data_dir: Path = Path.home() / ".mathdrill"

    def get_seed(self) -> Optional[int]:
        env_seed = os.environ.get("MATHDRILL_SEED")
        if env_seed:
            try:
                return TypeAdapter(int).validate_python(env_seed)
            except ValidationError as e:
                raise ValueError(f"MATHDRILL_SEED must be an integer, got {env_seed!r}") from e
        return self.seed

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        config_path = config_path or Path.home() / ".mathdrill" / "config.yaml"
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
