"""
Routing configuration.

Settings are plain values on a ``RoutingConfig`` dataclass. Documents loaded
from dictionaries or JSON files are checked against ``ROUTING_CONFIG_SCHEMA``
with ``jsonschema`` before any value is applied, so a typo in a config file
fails loudly instead of silently falling back to a default.

Example:
    >>> config = RoutingConfig.from_dict({"cache_size": 256})
    >>> graph = RoadGraph(config=config)
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jsonschema import Draft7Validator

from .core.enums import MAX_ROAD_SPEED_KPH
from .core.exceptions import ConfigurationError

# Defaults
DEFAULT_HEURISTIC_SPEED_KPH = float(MAX_ROAD_SPEED_KPH)
DEFAULT_CACHE_SIZE = 0  # Route cache disabled
DEFAULT_CACHE_TTL = 3600  # Seconds
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ROUTING_CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "heuristic_speed_kph": {"type": "number", "exclusiveMinimum": 0},
        "max_memory_mb": {"type": ["number", "null"], "exclusiveMinimum": 0},
        "cache_size": {"type": "integer", "minimum": 0},
        "cache_ttl": {"type": "number", "exclusiveMinimum": 0},
        "log_level": {"type": "string", "enum": list(LOG_LEVELS)},
    },
    "additionalProperties": False,
}

_validator = Draft7Validator(ROUTING_CONFIG_SCHEMA)


@dataclass(frozen=True)
class RoutingConfig:
    """
    Tunable settings for a road graph and its route finders.

    Attributes:
        heuristic_speed_kph (float): Speed used to turn straight-line distance
            into an A* time estimate. Must not be below the fastest road speed
            for A* time routes to stay optimal.
        max_memory_mb (Optional[float]): Per-search memory growth limit, None for none
        cache_size (int): Route cache capacity; 0 disables caching
        cache_ttl (float): Route cache entry lifetime in seconds
        log_level (str): Level applied by ``configure_logging``
    """

    heuristic_speed_kph: float = DEFAULT_HEURISTIC_SPEED_KPH
    max_memory_mb: Optional[float] = None
    cache_size: int = DEFAULT_CACHE_SIZE
    cache_ttl: float = DEFAULT_CACHE_TTL
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Validate field values after initialization."""
        validate_config_document(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutingConfig":
        """Build a config from a mapping; missing keys take their defaults.

        Raises:
            ConfigurationError: If the mapping does not match the schema
        """
        if not isinstance(data, dict):
            raise ConfigurationError("configuration must be a JSON object")
        validate_config_document(data)
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RoutingConfig":
        """Load a JSON configuration file.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        file_path = Path(path)
        if not file_path.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}")
        try:
            with open(file_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {file_path}: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_config_document(data: Dict[str, Any]) -> None:
    """Check a configuration mapping against the schema.

    Raises:
        ConfigurationError: Listing every schema violation found
    """
    errors = sorted(_validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        details = "; ".join(
            f"{'.'.join(str(p) for p in error.path) or '<root>'}: {error.message}"
            for error in errors
        )
        raise ConfigurationError(f"Invalid routing configuration: {details}")


def configure_logging(config: RoutingConfig) -> logging.Logger:
    """Apply ``config.log_level`` to the package logger and return it."""
    logger = logging.getLogger("roadgraph")
    logger.setLevel(config.log_level)
    return logger
