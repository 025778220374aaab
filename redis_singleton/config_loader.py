"""Configuration loader for connection options."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .config import normalize_options
from .const import DEFAULT_CONFIG_SECTION
from .domain.exceptions import InvalidOptionsError

_LOGGER = logging.getLogger(__name__)


def load_connection_options(
    path: str | Path,
    section: str = DEFAULT_CONFIG_SECTION,
) -> dict[str, Any]:
    """Load and validate connection options from a YAML file.

    The file may hold the options under ``section``, as a flat mapping, or
    as a bare connection URL:

        redis:
          host: cache.internal
          port: 6379
          db: 0

    Args:
        path: Path to the YAML file
        section: Top-level key holding the options (default: redis)

    Returns:
        Validated options, ready for connect()

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidOptionsError: If the YAML is malformed, empty or invalid
    """
    config_file = Path(path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        config = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise InvalidOptionsError(f"Invalid YAML: {err}", cause=err) from err

    if config is None:
        raise InvalidOptionsError(f"Configuration file is empty: {config_file}")

    if isinstance(config, dict) and section in config:
        config = config[section]
        if config is None:
            raise InvalidOptionsError(
                f"Configuration section '{section}' is empty: {config_file}"
            )

    options = normalize_options(config)

    _LOGGER.info(
        "Loaded Redis connection options from %s (%d keys)",
        config_file,
        len(options),
    )
    return options
