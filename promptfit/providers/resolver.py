# promptfit/providers/resolver.py
"""
Limits resolution for provider/model keys.

The resolver wraps an injected, immutable preset table. Exact model keys
win; otherwise the provider's ``default`` entry is used. Unknown providers
resolve to None, and ``require`` turns that into ProviderNotSupportedError.

Usage:
    >>> resolver = get_default_resolver()
    >>> resolver.require("openai", "gpt-4o").max_chars
    512000
    >>> resolver.require("openai", "some-future-model").max_chars  # provider default
    512000
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from promptfit.config.loader import LimitsTable, load_limits_table
from promptfit.core.exceptions import InvalidInputError, ProviderNotSupportedError
from promptfit.core.limits import Limits, LimitsOverride
from promptfit.logging.logger import get_logger
from promptfit.logging.tags import LIMITS

logger = get_logger(__name__)

DEFAULT_MODEL_KEY = "default"


class LimitsResolver:
    """
    Resolve Limits for a provider and model from a preset table.

    Args:
        table: Mapping provider -> model -> Limits. Treated as read-only.
    """

    def __init__(self, table: LimitsTable) -> None:
        self._table = table

    def providers(self) -> List[str]:
        """List known provider names."""
        return sorted(self._table)

    def models(self, provider: str) -> List[str]:
        """List explicitly configured models for a provider (excluding the default entry)."""
        entries = self._table.get(provider) or {}
        return sorted(name for name in entries if name != DEFAULT_MODEL_KEY)

    def resolve(self, provider: str, model: str) -> Optional[Limits]:
        """
        Look up limits for provider/model.

        Returns:
            The exact model entry, else the provider default, else None.
        """
        entries = self._table.get(provider)
        if entries is None:
            return None

        limits = entries.get(model)
        if limits is None:
            limits = entries.get(DEFAULT_MODEL_KEY)
            if limits is not None:
                logger.debug(
                    f"{LIMITS} No preset for model '{model}', using '{provider}' default"
                )
        return limits

    def require(self, provider: str, model: str) -> Limits:
        """
        Like resolve(), but raise when nothing matches.

        Raises:
            ProviderNotSupportedError: If no entry exists for the provider.
        """
        limits = self.resolve(provider, model)
        if limits is None:
            raise ProviderNotSupportedError(provider, model)
        return limits

    @staticmethod
    def apply_overrides(
        limits: Limits,
        overrides: Union[LimitsOverride, Mapping[str, Any], None],
    ) -> Limits:
        """
        Shallow field-level override of resolved limits.

        Raises:
            InvalidInputError: If the overrides are not valid limit values.
        """
        if overrides is None:
            return limits

        try:
            if not isinstance(overrides, LimitsOverride):
                overrides = LimitsOverride.model_validate(overrides)
            return overrides.apply(limits)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid custom limits: {e}") from e


@lru_cache(maxsize=1)
def get_default_resolver() -> LimitsResolver:
    """Build the resolver for the packaged preset table (loaded once)."""
    return LimitsResolver(load_limits_table())


__all__ = ["DEFAULT_MODEL_KEY", "LimitsResolver", "get_default_resolver"]
