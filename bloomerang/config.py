"""Configuration management for the Bloomerang connector."""

from dataclasses import dataclass, field
from typing import Any, List

from .catalog import CATALOG
from .common import BLOOMERANG_BASE_URL, DEFAULT_TIMEOUT_SECONDS


@dataclass
class BloomerangConfig:
    """Configuration class for the Bloomerang connector."""

    private_key: str
    tables: List[str] = field(default_factory=list)
    base_url: str = BLOOMERANG_BASE_URL
    request_timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


def _safe_int(value: Any, default: int) -> int:
    try:
        return int(str(value))
    except (ValueError, TypeError):
        return default


def _parse_tables(tables: Any) -> List[str]:
    if isinstance(tables, list):
        return [str(name).strip() for name in tables if str(name).strip()]
    if not tables or not str(tables).strip():
        return []
    return [name.strip() for name in str(tables).split(",") if name.strip()]


def validate_configuration(configuration: dict) -> None:
    """
    Validate the configuration dictionary to ensure it contains all required parameters.
    This function is called at the start of the update method to ensure that the connector has all necessary configuration values.
    Args:
        configuration: a dictionary that holds the configuration settings for the connector.
    Raises:
        ValueError: if any required configuration parameter is missing or a table name is unknown.
    """
    if not str(configuration.get("private_key") or "").strip():
        raise ValueError("Missing required configuration value: private_key")

    unknown = [name for name in _parse_tables(configuration.get("tables")) if name not in CATALOG]
    if unknown:
        raise ValueError(f"Unknown table(s) in configuration: {', '.join(unknown)}")


def parse_configuration(configuration: dict) -> BloomerangConfig:
    """Validate and parse the configuration dictionary."""
    validate_configuration(configuration)
    return BloomerangConfig(
        private_key=str(configuration.get("private_key")).strip(),
        tables=_parse_tables(configuration.get("tables")),
        base_url=str(configuration.get("base_url") or BLOOMERANG_BASE_URL).strip(),
        request_timeout_seconds=_safe_int(
            configuration.get("request_timeout_seconds"), DEFAULT_TIMEOUT_SECONDS
        ),
    )
