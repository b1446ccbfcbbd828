"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class EvaluationConfig(BaseModel):
    max_workers: int | None = Field(default=None, ge=1)
    regex_cache_size: int | None = Field(default=None, ge=1)


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


class AppConfig(BaseModel):
    evaluation: EvaluationConfig = Field(default_factory=EvaluationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        evaluation_settings = self.evaluation.model_dump(exclude_none=True)
        if evaluation_settings:
            settings["evaluation"] = evaluation_settings
        settings["logging"] = self.logging.model_dump()
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)


__all__ = ["AppConfig", "EvaluationConfig", "LoggingConfig", "load_config"]
