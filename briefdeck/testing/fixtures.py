"""Pytest fixtures for BriefDeck."""

from __future__ import annotations

from random import Random

import pytest

from ..app import BriefApp
from ..config import BriefDeckConfig


@pytest.fixture()
def memory_app() -> BriefApp:
    config = BriefDeckConfig(bot_token="test", seed_sample_data=True)
    return BriefApp(config, rng=Random(1234))


def app_fixture(bot_token: str = "test", **kwargs) -> BriefApp:
    """Helper for ad-hoc tests where pytest is not available."""
    config = BriefDeckConfig(bot_token=bot_token, **kwargs)
    return BriefApp(config)
