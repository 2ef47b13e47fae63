"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class PaginationConfig(BaseModel):
    """Page sizing for list queries."""

    page_size: int = Field(default=25, ge=1)
    max_page_size: int = Field(default=100, ge=1)


class Settings(BaseSettings):
    """Main configuration class."""

    environment: str = "development"

    # Paths
    data_dir: Path = Path("data")

    # MongoDB
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "docstore"

    # Observability
    log_level: str = "INFO"
    logfire_token: str = ""

    # Nested configuration sections
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOCSTORE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("data_dir", mode="after")
    @classmethod
    def resolve_data_dir(cls, v: Path) -> Path:
        """Resolve data directory to absolute path."""
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def page_size(self) -> int:
        """Default page size used when a query does not ask for one."""
        return self.pagination.page_size

    @property
    def max_page_size(self) -> int:
        return self.pagination.max_page_size

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration."""
        config_path = self.data_dir / "config.yaml"

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            if "pagination" in yaml_config:
                section_dict = self.pagination.model_dump()
                section_dict.update(yaml_config["pagination"])
                self.pagination = PaginationConfig(**section_dict)

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
