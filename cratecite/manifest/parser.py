"""Cargo manifest parsing.

Reads ``Cargo.toml`` with the standard library TOML reader and maps the
``[package]`` table onto ``ProjectMetadata``. The ``[dependencies]``
table is kept raw (declaration order preserved) for the classifier.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from cratecite.core.exceptions import ManifestParseError
from cratecite.core.models import ManifestDocument, ProjectMetadata
from cratecite.core.strings import clean_text

logger = logging.getLogger(__name__)


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


class ManifestParser:
    """Parse Cargo manifests into ``ManifestDocument`` values."""

    def parse_file(self, path: Path | str) -> ManifestDocument:
        """Read and parse a manifest file.

        Raises:
            ManifestParseError: If the file is unreadable, is not valid
                TOML, or lacks a usable ``[package]`` table.
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestParseError(path, f"could not read file: {e}") from e
        return self.parse_text(content, path)

    def parse_text(self, content: str, path: Path | str) -> ManifestDocument:
        """Parse manifest text; ``path`` is only used for reporting."""
        path = Path(path)
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ManifestParseError(path, str(e)) from e

        package = data.get("package")
        if not isinstance(package, dict):
            raise ManifestParseError(path, "missing [package] table")

        name = clean_text(package.get("name"))
        if name is None:
            raise ManifestParseError(path, "package has no name")

        version = clean_text(package.get("version"))
        if version is None and "version" in package:
            logger.debug(f"{path}: version is inherited, leaving it unset")

        metadata = ProjectMetadata(
            name=name,
            version=version,
            description=clean_text(package.get("description")),
            authors=_strings(package.get("authors")),
            repository=clean_text(package.get("repository")),
            homepage=clean_text(package.get("homepage")),
            keywords=_strings(package.get("keywords")),
        )

        dependencies = data.get("dependencies", {})
        if not isinstance(dependencies, dict):
            raise ManifestParseError(path, "[dependencies] is not a table")

        return ManifestDocument(
            path=path,
            package=metadata,
            dependencies=tuple(dependencies.items()),
        )
