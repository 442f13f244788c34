"""Unit tests configuration file."""

import pytest

from reflectkit.reflection import TypeCache


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def cache():
    """A private cache, so tests do not observe each other's builds."""
    return TypeCache()
