"""Shared fixtures: every test starts from pristine structlog and settings state."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from asyncfp.config import load_settings


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
    structlog.reset_defaults()
