"""Application settings for the habitat designer backend."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

ENV_PREFIX = "HABITAT_"


class AppSettings(BaseModel):
    """Server, storage and auth settings."""

    data_path: Path = Path("data/habitats.json")
    # Development default only; set HABITAT_SECRET_KEY in production.
    secret_key: str = "supersecret_nasa_key"
    token_ttl_seconds: int = Field(2 * 60 * 60, gt=0)
    host: str = "0.0.0.0"
    port: int = Field(5000, ge=1, le=65535)
    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "AppSettings":
        values: Dict[str, Any] = dict(overrides)
        values.update(_env_values(environ if environ is not None else os.environ))
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ValueError(f"Invalid settings: {exc}") from exc


def _env_values(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name in AppSettings.model_fields:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = raw
    return values


def load_settings(path: Path | str | None = None, environ: Mapping[str, str] | None = None) -> AppSettings:
    """Read settings from an optional JSON file, then apply environment overrides."""

    data: Dict[str, Any] = {}
    if path is not None:
        data = json.loads(Path(path).read_text())
    return AppSettings.from_env(environ, **data)
