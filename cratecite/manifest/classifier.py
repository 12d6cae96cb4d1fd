"""Dependency classification by provenance."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from cratecite.core.models import (
    DependencyDescriptor,
    DependencyKind,
    ManifestDocument,
    PathDependency,
    RegistryDependency,
    VersionControlDependency,
)
from cratecite.core.strings import clean_text

logger = logging.getLogger(__name__)


class DependencyClassifier:
    """Turn a manifest's dependency table into typed descriptors.

    A table carrying ``git`` is a version-control dependency, otherwise
    one carrying ``path`` is a path dependency, otherwise it comes from
    the registry. Declaration order is preserved.
    """

    def classify(self, document: ManifestDocument) -> list[DependencyDescriptor]:
        """Classify every usable entry of one manifest.

        Unusable entries are skipped with a warning.
        """
        descriptors = []
        for key, value in document.dependencies:
            descriptor = self.classify_entry(key, value)
            if descriptor is None:
                reason = "unsupported value" if clean_text(key) else "no usable name"
                logger.warning(
                    f"Skipping dependency {key!r} in {document.path}: {reason}"
                )
                continue
            descriptors.append(descriptor)
        return descriptors

    def classify_entry(self, key: Any, value: Any) -> DependencyDescriptor | None:
        """Classify one ``(name, value)`` pair, or None if it is unusable."""
        name = clean_text(key)
        if name is None:
            return None

        if isinstance(value, str):
            return RegistryDependency(name=name, requirement=clean_text(value))

        if not isinstance(value, dict):
            return None

        # ``package`` renames the crate; the real name is what gets cited
        name = clean_text(value.get("package")) or name
        requirement = clean_text(value.get("version"))

        if git := clean_text(value.get("git")):
            return VersionControlDependency(
                name=name,
                url=git,
                requirement=requirement,
                rev=clean_text(value.get("rev")),
                branch=clean_text(value.get("branch")),
                tag=clean_text(value.get("tag")),
            )
        if path := clean_text(value.get("path")):
            return PathDependency(name=name, path=path, requirement=requirement)
        return RegistryDependency(name=name, requirement=requirement)

    def classify_all(
        self, documents: Iterable[ManifestDocument]
    ) -> list[DependencyDescriptor]:
        """Classify several manifests and drop repeats.

        Descriptors are unique by name and kind; the first occurrence wins.
        """
        seen: set[tuple[str, DependencyKind]] = set()
        result = []
        for document in documents:
            for descriptor in self.classify(document):
                identity = (descriptor.name, descriptor.kind)
                if identity in seen:
                    logger.debug(f"Dropping repeated dependency {descriptor.name}")
                    continue
                seen.add(identity)
                result.append(descriptor)
        return result
