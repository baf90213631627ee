"""Test factories for creating test data."""

from tests.factories.tracker import TrackerFactory

__all__ = [
    "TrackerFactory",
]
