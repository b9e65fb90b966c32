from __future__ import annotations

import math
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from thinline.types import EdgeOperator, ForegroundPolarity, MarkingMethod


def _check_level(value: float, name: str) -> float:
    level = float(value)
    if not math.isfinite(level) or not 0.0 <= level <= 1.0:
        raise ValueError(f"{name} must be within [0.0, 1.0]")
    return level


class ThresholdConfig(BaseModel):
    enable: bool = False
    level: float = 0.5

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: float) -> float:
        return _check_level(value, "threshold.level")


class EdgeConfig(BaseModel):
    enable: bool = False
    operator: EdgeOperator = EdgeOperator.SOBEL4
    threshold: float | None = 0.1

    @field_validator("operator", mode="before")
    @classmethod
    def _validate_operator(cls, value: object) -> object:
        return EdgeOperator.parse(value)

    @field_validator("threshold")
    @classmethod
    def _validate_threshold(cls, value: float | None) -> float | None:
        if value is None:
            return None
        return _check_level(value, "edge.threshold")


class ThinningConfig(BaseModel):
    enable: bool = True
    method: MarkingMethod = MarkingMethod.MODIFIED
    max_iterations: int | None = Field(default=None, ge=1)

    @field_validator("method", mode="before")
    @classmethod
    def _validate_method(cls, value: object) -> object:
        return MarkingMethod.parse(value)


class AppConfig(BaseModel):
    foreground: ForegroundPolarity = ForegroundPolarity.BLACK
    threshold: ThresholdConfig = Field(default_factory=ThresholdConfig)
    edge: EdgeConfig = Field(default_factory=EdgeConfig)
    thinning: ThinningConfig = Field(default_factory=ThinningConfig)

    @field_validator("foreground", mode="before")
    @classmethod
    def _validate_foreground(cls, value: object) -> object:
        return ForegroundPolarity.parse(value)


def load_config(path: str | Path | None = None) -> AppConfig:
    if path is None:
        return AppConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    return AppConfig.model_validate(raw)
