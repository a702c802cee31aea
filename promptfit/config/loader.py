# promptfit/config/loader.py
"""
Loading of the provider/model limits preset table.

Resolution:
    1. Package defaults (promptfit/config/default_limits.yaml) - always loaded
    2. User overrides (explicit path, or $PROMPTFIT_LIMITS_FILE) - deep-merged on top

The result is an immutable mapping ``provider -> model -> Limits`` meant to
be loaded once and injected into a LimitsResolver.

Usage:
    >>> from promptfit.config.loader import load_limits_table
    >>> table = load_limits_table()
    >>> table["openai"]["gpt-4o"].max_bytes
    512000
"""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from promptfit.core.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from promptfit.core.limits import Limits
from promptfit.logging.logger import get_logger
from promptfit.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULT_LIMITS_PATH = Path(__file__).parent / "default_limits.yaml"
LIMITS_FILE_ENV = "PROMPTFIT_LIMITS_FILE"

LimitsTable = Mapping[str, Mapping[str, Limits]]


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML file and return it as a dictionary.

    Raises:
        ConfigNotFoundError: If file doesn't exist
        ConfigParseError: If YAML is invalid or the root is not a mapping
    """
    p = Path(path)

    if not p.exists():
        raise ConfigNotFoundError("Config file not found", path=p)

    if p.is_dir():
        raise ConfigError("Config path is a directory, not a file", path=p)

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}", path=p) from e

    if not isinstance(data, dict):
        raise ConfigParseError("Config root must be a mapping (dict)", path=p)

    logger.debug(f"{CONFIG} Loaded config from {p}")
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from `override` take precedence over `base`. Nested dicts are
    merged recursively, everything else is replaced.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def parse_limits_table(data: Dict[str, Any], path: Optional[Path] = None) -> LimitsTable:
    """
    Validate raw config data into an immutable limits table.

    Raises:
        ConfigValidationError: If the providers block or any entry is malformed.
    """
    providers = data.get("providers")
    if not isinstance(providers, dict):
        raise ConfigValidationError("Config must contain a 'providers' mapping", path=path)

    table: Dict[str, Mapping[str, Limits]] = {}
    for provider, models in providers.items():
        if not isinstance(models, dict):
            raise ConfigValidationError(
                f"Provider '{provider}' must map model names to limits", path=path
            )

        entries: Dict[str, Limits] = {}
        for model, raw in models.items():
            try:
                entries[str(model)] = Limits.model_validate(raw)
            except ValidationError as e:
                raise ConfigValidationError(
                    f"Invalid limits for '{provider}/{model}': {e}", path=path
                ) from e

        table[str(provider)] = MappingProxyType(entries)

    return MappingProxyType(table)


def load_limits_table(
    path: Optional[Union[str, Path]] = None,
    overrides_path: Optional[Union[str, Path]] = None,
) -> LimitsTable:
    """
    Load the limits preset table.

    Args:
        path: Base table. Defaults to the packaged default_limits.yaml.
        overrides_path: Optional file deep-merged over the base table.
            Falls back to $PROMPTFIT_LIMITS_FILE when not given.

    Returns:
        Immutable mapping provider -> model -> Limits.

    Raises:
        ConfigError: If either file is missing, unparseable or invalid.
    """
    base_path = Path(path) if path is not None else DEFAULT_LIMITS_PATH
    data = load_yaml(base_path)

    if overrides_path is None:
        overrides_path = os.environ.get(LIMITS_FILE_ENV) or None

    source = base_path
    if overrides_path is not None:
        source = Path(overrides_path)
        logger.debug(f"{CONFIG} Applying limits overrides from {source}")
        data = deep_merge(data, load_yaml(source))

    return parse_limits_table(data, path=source)


__all__ = [
    "DEFAULT_LIMITS_PATH",
    "LIMITS_FILE_ENV",
    "LimitsTable",
    "load_yaml",
    "deep_merge",
    "parse_limits_table",
    "load_limits_table",
]
