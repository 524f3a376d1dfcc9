"""Shared pytest fixtures for all tests."""

import pytest

from bigfile.config import load_settings
from bigfile.features.base import BaseFeature, FeatureOptions
from bigfile.features.registry import FeatureRegistry
from bigfile.host.memory import InMemoryHost
from bigfile.state import reset_plugin_state

MIB = 1024 * 1024


class RecordingFeature(BaseFeature):
    """Feature that records disable calls into a shared log."""

    def __init__(self, name: str, log: list, defer: bool = False):
        self._name = name
        self.log = log
        self.options = FeatureOptions(defer=defer)

    @property
    def name(self) -> str:
        return self._name

    def disable(self, document_id) -> None:
        self.log.append((self.name, document_id))


@pytest.fixture(autouse=True)
def clean_state():
    """Reset process-wide state around every test."""
    reset_plugin_state()
    load_settings.cache_clear()
    yield
    reset_plugin_state()
    load_settings.cache_clear()


@pytest.fixture
def host():
    """Create an empty in-memory host."""
    return InMemoryHost()


@pytest.fixture
def calls():
    """Shared log of (feature name, document id) disable calls."""
    return []


@pytest.fixture
def make_feature(calls):
    """Factory for recording features writing to the shared log."""

    def _make(name: str, defer: bool = False) -> RecordingFeature:
        return RecordingFeature(name, calls, defer=defer)

    return _make


@pytest.fixture
def registry(make_feature):
    """Registry with A, C immediate and B, D deferred recording features."""
    return FeatureRegistry(
        [
            make_feature("A"),
            make_feature("B", defer=True),
            make_feature("C"),
            make_feature("D", defer=True),
        ]
    )
