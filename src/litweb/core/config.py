import codecs
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Observability
    LOG_FORMAT: str = "auto"  # json|plain|auto
    LOG_LEVEL: str = "info"  # debug|info|warning|error
    NO_COLOR: bool = False  # Disable colored output

    # Input
    SOURCE_ENCODING: str = "utf-8"
    STRICT_CHUNKS: bool = False  # Raise on chunks left open at end of document

    # Tangle output
    TARGET_DIR: Optional[str] = None  # Default: directory of the document
    SKIP_UNCHANGED: bool = True  # Leave files with identical content untouched

    # Weave output
    WEAVE_SUFFIX: str = ".html"

    model_config = SettingsConfigDict(
        env_prefix="LITWEB_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("SOURCE_ENCODING")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {value}") from e
        return value

    @field_validator("WEAVE_SUFFIX")
    @classmethod
    def _dotted_suffix(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2 or "/" in value:
            raise ValueError(f"suffix must look like '.html', got {value!r}")
        return value

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_file}")
        else:
            # Auto-discover .litweb.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".litweb.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Values from the environment win over the config file
        env_settings = cls()
        overrides = {
            key.upper(): value
            for key, value in config_data.items()
            if key.upper() in cls.model_fields and key.upper() not in env_settings.model_fields_set
        }
        return cls(**{**env_settings.model_dump(exclude_unset=True), **overrides})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Default settings for library callers that pass none.

    Built on first use so a bad environment fails where it can be reported.
    """
    return Settings()
