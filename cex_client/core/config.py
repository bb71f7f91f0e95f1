from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from cex_client.core.errors import ConfigurationError
from cex_client.core.types import DEFAULT_PAIR

DEFAULT_BASE_URL = "https://cex.io/api"
DEFAULT_AGENT_LABEL = "cex_client-python"


class LoggingConfig(BaseModel):
    level: str = "INFO"


class ExchangeConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout_sec: float = Field(default=10.0, gt=0)
    # the service allows roughly one request per second per account
    min_interval_sec: float = Field(default=1.0, ge=1.0)
    agent_label: str = DEFAULT_AGENT_LABEL
    default_pair: str = DEFAULT_PAIR


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    exchange: ExchangeConfig = Field(default_factory=ExchangeConfig)


def load_config(path: str | None = None) -> AppConfig:
    if path is None:
        return AppConfig()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)
    data = yaml.safe_load(p.read_text()) or {}
    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path}: {e}") from e
