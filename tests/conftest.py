# tests/conftest.py
"""
Shared fixtures and tier markers for the promptfit test suite.

Test Tiers:
- tier1: Pure logic, no I/O (<5s)
         Run: pytest -m tier1
- tier2: Tests touching the filesystem or environment (tmp_path, monkeypatch.setenv)
         Run: pytest -m "tier1 or tier2"
"""

from __future__ import annotations

from typing import Callable

import pytest

from promptfit.core.chunk import Image
from promptfit.core.limits import Limits

from .factories import make_limits

TIER2_PATTERNS = [
    "test_config_loader",
]


def pytest_collection_modifyitems(items):
    """Mark every test tier1 unless its file touches the filesystem."""
    for item in items:
        fspath = str(item.fspath)

        has_tier = any(marker.name.startswith("tier") for marker in item.iter_markers())
        if has_tier:
            continue

        if any(pattern in fspath for pattern in TIER2_PATTERNS):
            item.add_marker(pytest.mark.tier2)
        else:
            item.add_marker(pytest.mark.tier1)


@pytest.fixture
def limits_factory() -> Callable[..., Limits]:
    """Fixture exposing make_limits."""
    return make_limits


@pytest.fixture
def small_limits() -> Limits:
    """1000 bytes / 500 chars / 250 tokens, up to 2 images of 100 bytes."""
    return make_limits(max_images=2, image_byte_limit=100)


@pytest.fixture
def tiny_image() -> Image:
    """A 50-byte image payload."""
    return Image(data=b"\x89PNG" + b"x" * 46, mime_type="image/png")
