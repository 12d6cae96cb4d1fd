"""Pytest fixtures for CLI tests."""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from cratecite.cli.main import cli


class Runner:
    """Small wrapper so tests call ``cli_runner.invoke([...])``."""

    def __init__(self):
        self.runner = CliRunner()

    def invoke(self, args, **kwargs):
        return self.runner.invoke(cli, args, **kwargs)


@pytest.fixture
def cli_runner():
    """CLI runner for the cratecite command."""
    return Runner()


@pytest.fixture
def patched_enricher(fake_enricher):
    """Replace the registry client used by the CLI with a fake."""
    fake = fake_enricher()
    with patch("cratecite.cli.main.RegistryEnricher") as enricher_cls:
        enricher_cls.return_value = MagicMock()
        enricher_cls.return_value.__enter__.return_value = fake
        yield enricher_cls, fake
