"""Shared fixtures for the bouncer test-suite."""
from __future__ import annotations

from typing import Any

import pytest

from bouncer.validation import Validator


@pytest.fixture
def vals() -> dict[str, Any]:
    """A fresh value bag, as the middleware creates per request."""
    return {}


@pytest.fixture
def make(vals):
    """Build a Validator on the shared bag: ``make(value, key="test", ctx=None)``."""

    def _make(value: Any = None, key: str = "test", ctx: Any = None) -> Validator:
        return Validator(ctx, key, vals, value)

    return _make
