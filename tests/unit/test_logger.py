"""
Unit Tests for Logging Configuration
====================================
"""

import io

import pytest
import structlog

from insight_ingest.config.settings import Settings
from insight_ingest.utils.logger import configure_logging


def _renderer() -> object:
    return structlog.get_config()["processors"][-1]


class TestConfigureLogging:
    """Renderer selection follows Settings.log_format."""

    @pytest.mark.parametrize(
        ("settings", "renderer"),
        [
            (Settings(environment="production"), structlog.processors.JSONRenderer),
            (Settings(environment="development"), structlog.dev.ConsoleRenderer),
            (
                Settings(environment="development", log_format="json"),
                structlog.processors.JSONRenderer,
            ),
            (
                Settings(environment="production", log_format="console"),
                structlog.dev.ConsoleRenderer,
            ),
        ],
    )
    def test_renderer_choice(self, settings: Settings, renderer: type) -> None:
        """auto means JSON only in production; explicit formats win."""
        configure_logging(stream=io.StringIO(), settings=settings)

        assert isinstance(_renderer(), renderer)

    def test_invalid_format_rejected(self) -> None:
        """Unknown formats fail at settings load."""
        with pytest.raises(ValueError):
            Settings(log_format="xml")
