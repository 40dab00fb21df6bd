"""Configuration for operation generation.

Configuration comes from a JSON file with camelCase keys (default
``gqlopera.config.json``), overlaid by command-line options, and is
validated once into a frozen ``GeneratorConfig``.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .errors import ConfigError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "gqlopera.config.json"


class CircularRefMode(str, Enum):
    """How a type already on the current path is handled."""
    SKIP = "skip"      # Render the field with an annotation, no expansion
    SILENT = "silent"  # Drop the field from the selection
    ALLOW = "allow"    # Re-enter the type in restricted mode, bounded


class GeneratorConfig(BaseModel):
    """Validated settings for one generation pass."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    endpoint: str | None = None
    schema_path: str | None = Field(default=None, alias="schema")
    output: str = "graphql"
    headers: dict[str, str] = Field(default_factory=dict)
    exclude_types: list[str] = Field(default_factory=list)
    include_fields: list[str] = Field(default_factory=list)
    exclude_fields: list[str] = Field(default_factory=list)
    custom_scalars: list[str] = Field(default_factory=list)
    header: str | None = None
    watch: bool = False
    watch_interval: float = Field(default=5.0, gt=0)
    timeout: float = Field(default=30.0, gt=0)
    max_depth: int = Field(default=5, ge=1, le=10)
    max_fields: int = Field(default=50, ge=1, le=100)
    shallow_mode: bool = False
    circular_refs: CircularRefMode = CircularRefMode.SKIP
    circular_ref_depth: int = Field(default=1, ge=0)
    circular_ref_types: dict[str, int] = Field(default_factory=dict)

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return value

    @field_validator("circular_ref_types")
    @classmethod
    def _check_type_depths(cls, value: dict[str, int]) -> dict[str, int]:
        for type_name, depth in value.items():
            if depth < 0:
                raise ValueError(f"depth for {type_name} must be >= 0")
        return value

    @property
    def effective_max_depth(self) -> int:
        """Depth limit after applying shallow mode."""
        return 1 if self.shallow_mode else self.max_depth

    def reentry_depth(self, type_name: str) -> int:
        """Re-entry budget for a circular type; per-type overrides win."""
        return self.circular_ref_types.get(type_name, self.circular_ref_depth)


def load_config(
    config_path: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> GeneratorConfig:
    """Load, merge and validate configuration.

    Args:
        config_path: Path to a JSON config file. None reads the default file
            when it exists.
        overrides: Field values (snake_case names) that take precedence over
            the file. None values are ignored.

    Returns:
        The validated configuration

    Raises:
        ConfigError: If the file is missing, not JSON, or fails validation
    """
    data = _read_config_file(config_path)

    for name, value in (overrides or {}).items():
        if value is None:
            continue
        model_field = GeneratorConfig.model_fields.get(name)
        if model_field is None:
            raise ConfigError(f"Unknown configuration option: {name}")
        data.pop(name, None)
        data[model_field.alias or to_camel(name)] = value

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "config"
        raise ConfigError(f"Configuration validation failed: {location}: {error['msg']}") from e


def _read_config_file(config_path: str | None) -> dict[str, Any]:
    if config_path is None:
        path = Path(DEFAULT_CONFIG_FILE).resolve()
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return {}
    else:
        path = Path(config_path).resolve()
        if path.suffix != ".json":
            raise ConfigError("Only JSON configuration files are supported. Use .json extension.")
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to parse JSON config file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Failed to parse JSON config file: top level must be an object")
    logger.debug(f"Loaded config from {path}")
    return data


def parse_headers(raw: str) -> dict[str, str]:
    """Parse headers given as a JSON object string on the command line."""
    try:
        headers = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError("Invalid JSON format for headers") from e
    if not isinstance(headers, dict):
        raise ConfigError("Invalid JSON format for headers")
    return {str(k): str(v) for k, v in headers.items()}


def split_names(raw: str | None) -> list[str] | None:
    """Split a comma-separated option value, dropping blanks."""
    if raw is None:
        return None
    return [part.strip() for part in raw.split(",") if part.strip()]


def write_default_config(path: str = DEFAULT_CONFIG_FILE) -> Path | None:
    """Write a starter config file.

    Returns:
        The written path, or None if the file already exists
    """
    target = Path(path).resolve()
    if target.exists():
        logger.warning(f"Configuration file already exists: {target.name}")
        return None

    starter = {
        "endpoint": "http://localhost:4000/graphql",
        "output": "graphql",
        "headers": {},
        "maxDepth": 5,
        "maxFields": 50,
        "circularRefs": CircularRefMode.SKIP.value,
        "circularRefDepth": 1,
    }
    target.write_text(json.dumps(starter, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Configuration file created: {target.name}")
    return target
