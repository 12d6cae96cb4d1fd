"""Pytest configuration and fixtures."""

import logging
import os
import textwrap
from datetime import date
from pathlib import Path

import pytest

from cratecite.core.models import EnrichmentResult, PartialMetadata


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path_factory):
    """Isolate environment variables and user config for each test.

    This prevents test pollution where one test's environment
    changes affect other tests.
    """
    original_env = os.environ.copy()
    for name in list(os.environ):
        if name.startswith("CRATECITE_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))

    yield

    os.environ.clear()
    os.environ.update(original_env)
    logging.getLogger("cratecite").setLevel(logging.NOTSET)


@pytest.fixture
def fixed_today():
    """Clock returning a fixed date."""
    return lambda: date(2024, 3, 15)


@pytest.fixture
def make_crate():
    """Write a Cargo.toml into a directory and return its path."""

    def _make(
        directory: Path,
        name: str = "demo",
        version: str = "0.1.0",
        dependencies: str = "",
        extra: str = "",
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        manifest = directory / "Cargo.toml"
        content = textwrap.dedent(
            f"""\
            [package]
            name = "{name}"
            version = "{version}"
            {extra}
            """
        )
        if dependencies:
            content += "\n[dependencies]\n" + textwrap.dedent(dependencies)
        manifest.write_text(content, encoding="utf-8")
        return manifest

    return _make


@pytest.fixture
def fake_enricher():
    """Enricher stub answering from a dict; unknown names fail."""

    class FakeEnricher:
        def __init__(self, known: dict[str, PartialMetadata] | None = None):
            self.known = known or {}
            self.calls: list[str] = []

        def __call__(self, name: str) -> EnrichmentResult:
            self.calls.append(name)
            if name in self.known:
                return EnrichmentResult(name=name, metadata=self.known[name])
            return EnrichmentResult.failed(name, "network error: simulated")

    return FakeEnricher
