"""Application configuration using pydantic-settings."""

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

CONFIG_FILE_NAME = "ensembl-dictionary.toml"


def _flatten_tables(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten_tables(value, f"{name}_"))
        else:
            flat[name] = value
    return flat


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings from an optional TOML file in the working directory.

    Tables prefix their keys, so ``[ebi_search]`` / ``base_url = ...`` sets
    ``ebi_search_base_url``. Keys that name no setting are ignored.
    """

    def __init__(
        self, settings_cls: type[BaseSettings], path: Path | None = None
    ) -> None:
        super().__init__(settings_cls)
        self.path = path or Path.cwd() / CONFIG_FILE_NAME
        self._data: dict[str, Any] = {}
        if self.path.is_file():
            with self.path.open("rb") as handle:
                self._data = _flatten_tables(tomllib.load(handle))

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {
            name: self._data[name]
            for name in self.settings_cls.model_fields
            if name in self._data
        }


class Settings(BaseSettings):
    """Settings from env vars, then ``.env``, then the TOML config file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_docs_enabled: bool = True

    # EBI Search
    #
    # When unset, the adapter talks to the public EBI Search service for the
    # ``ensembl_gene`` domain.
    ebi_search_base_url: str | None = None
    ebi_search_format: str = "json"
    ebi_search_timeout_seconds: float = Field(default=15.0, gt=0)

    # Dictionary behaviour
    dictionary_optimap: bool = False
    dictionary_log_urls: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            TomlConfigSettingsSource(settings_cls),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
