"""Testing utilities for BriefDeck."""

from .factory import CardFactory, UserFactory
from .fixtures import app_fixture, memory_app
from .test_client import TestClient

__all__ = [
    "CardFactory",
    "UserFactory",
    "app_fixture",
    "memory_app",
    "TestClient",
]
