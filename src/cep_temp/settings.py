from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .adapters.postal.viacep import VIACEP_BASE_URL
from .adapters.weather.weatherapi import WEATHERAPI_BASE_URL
from .transport import DEFAULT_USER_AGENT

PROJECT_ROOT = Path(__file__).resolve().parents[2]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _validate_base_url(value: str, *, field_name: str) -> str:
    text = value.strip().rstrip("/")
    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"{field_name} must be an absolute http(s) URL")
    return text


class PostalProviderSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_url: str = VIACEP_BASE_URL

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        return _validate_base_url(value, field_name="postal.base_url")


class WeatherProviderSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_url: str = WEATHERAPI_BASE_URL
    include_air_quality: bool = False

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        return _validate_base_url(value, field_name="weather.base_url")


class HttpClientSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # None keeps the transport's own default timeout.
    timeout_seconds: float | None = Field(default=None, gt=0, le=300)
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("http.user_agent must not be empty")
        return text


class CepTempYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    postal: PostalProviderSettings = Field(default_factory=PostalProviderSettings)
    weather: WeatherProviderSettings = Field(default_factory=WeatherProviderSettings)
    http: HttpClientSettings = Field(default_factory=HttpClientSettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    weather_api_key: str | None = None
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"
    cep_temp_config_path: Path = Path("config/cep_temp.yaml")

    @field_validator("weather_api_key")
    @classmethod
    def validate_weather_api_key(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        return text or None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


class AppSettings(BaseModel):
    env: EnvSettings
    yaml: CepTempYamlSettings
    config_path: Path


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _load_yaml_settings(path: Path) -> CepTempYamlSettings:
    if not path.exists():
        return CepTempYamlSettings()

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("cep-temp config must be a YAML mapping/object at the top level")
    return CepTempYamlSettings.model_validate(raw_config)


def build_settings(env: EnvSettings) -> AppSettings:
    config_path = _resolve_project_path(env.cep_temp_config_path)
    return AppSettings(env=env, yaml=_load_yaml_settings(config_path), config_path=config_path)


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    return build_settings(EnvSettings())
