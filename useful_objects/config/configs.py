from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

"""
Settings that steer how useful objects are built and observed from the outside
(CLI, scripts). Library calls take explicit arguments and never read these.
"""


class RecipeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    namespace: str = Field(
        default="operational",
        min_length=1,
        description="Recipe namespace applied by build (operational or substitute)",
    )
    require_operational: bool = Field(
        default=False, description="Fail build when a dependency slot has no recipe"
    )


class TelemetryConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    events_path: Optional[Path] = Field(default=None, description="JSONL file for recorded events")
    secret_keys: list[str] = Field(
        default=["api_key", "api_secret", "secret", "password", "token", "auth_token"],
        description="Event fields redacted in the JSONL file",
    )
    log_events: bool = Field(default=False, description="Mirror recorded events to the logger")

    @field_validator("secret_keys", mode="before")
    @classmethod
    def _split_secret_keys(cls, value: object) -> object:
        # env and --set layers deliver "a,b,c"
        if isinstance(value, str):
            return [key.strip() for key in value.split(",") if key.strip()]
        return value


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


class Config(BaseModel):
    model_config = ConfigDict(extra="forbid")
    recipes: RecipeConfig = Field(default_factory=RecipeConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
