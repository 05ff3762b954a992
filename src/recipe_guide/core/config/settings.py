"""Application configuration using Pydantic Settings with YAML support.

Sources, highest priority first:

1. Values passed to ``Settings()``
2. Environment variables (``RECIPE_GUIDE__COMBINATION_WARNING_THRESHOLD=64``)
3. ``.env`` file
4. YAML: ``config/base/*.yaml`` overlaid with ``config/environments/{APP_ENV}/``
5. Defaults declared below
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


def parse_list(v: str | list[str]) -> list[str]:
    """Parse comma-separated string or list into list of strings."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Guide Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1/recipe-guide"
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


class RecipeGuideSettings(BaseModel):
    """Recipe guide behaviour.

    ``combination_warning_threshold`` is the product size above which the
    host flags a resolution as large before authors materialize it.
    ``lenient_empty_groups`` makes a selected group without options
    contribute a placeholder instead of emptying the whole product.
    """

    combination_warning_threshold: int = Field(default=100, ge=1)
    lenient_empty_groups: bool = False


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    recipe_guide: RecipeGuideSettings = RecipeGuideSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source between dotenv and file secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_non_production(self) -> bool:
        """True for local, test and development, where API docs are served."""
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
