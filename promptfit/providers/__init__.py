# promptfit/providers/__init__.py
"""Provider/model limits lookup."""

from promptfit.providers.resolver import LimitsResolver, get_default_resolver

__all__ = ["LimitsResolver", "get_default_resolver"]
