"""Core data models for crate citations.

This module defines the immutable structures that flow through the
citation pipeline: the metadata of a crate as declared in its manifest,
the classified dependencies of that crate, the partial metadata returned
by the registry, and the rendered BibTeX entries.

Key components:
- ProjectMetadata: the ``[package]`` table of a manifest
- ManifestDocument: one parsed manifest with its raw dependency table
- RegistryDependency / PathDependency / VersionControlDependency: the
  closed set of dependency kinds, combined as ``DependencyDescriptor``
- PartialMetadata / EnrichmentResult: registry lookups that may fail
- BibEntry: a rendered BibTeX record
"""

import enum
from pathlib import Path
from typing import Any, TypeAlias

import msgspec

from .fields import EntryType


class DependencyKind(enum.Enum):
    """Provenance of a declared dependency."""

    REGISTRY = "registry"
    PATH = "path"
    VERSION_CONTROL = "version_control"


class ProjectMetadata(msgspec.Struct, frozen=True, kw_only=True):
    """Descriptive metadata of one crate, read from its manifest."""

    name: str
    version: str | None = None
    description: str | None = None
    authors: tuple[str, ...] = ()
    repository: str | None = None
    homepage: str | None = None
    keywords: tuple[str, ...] = ()


class ManifestDocument(msgspec.Struct, frozen=True, kw_only=True):
    """A parsed manifest.

    ``dependencies`` keeps the raw ``(name, value)`` pairs of the
    ``[dependencies]`` table in declaration order; values are either a
    version string or a table.
    """

    path: Path
    package: ProjectMetadata
    dependencies: tuple[tuple[str, Any], ...] = ()


class RegistryDependency(msgspec.Struct, frozen=True, kw_only=True, tag="registry"):
    """A dependency resolved by name against the package registry."""

    name: str
    requirement: str | None = None

    @property
    def kind(self) -> DependencyKind:
        return DependencyKind.REGISTRY


class PathDependency(msgspec.Struct, frozen=True, kw_only=True, tag="path"):
    """A dependency pointing at a local directory.

    ``path`` is the literal manifest value, never resolved.
    """

    name: str
    path: str
    requirement: str | None = None

    @property
    def kind(self) -> DependencyKind:
        return DependencyKind.PATH


class VersionControlDependency(
    msgspec.Struct, frozen=True, kw_only=True, tag="version_control"
):
    """A dependency fetched from a version-control repository."""

    name: str
    url: str
    requirement: str | None = None
    rev: str | None = None
    branch: str | None = None
    tag: str | None = None

    @property
    def kind(self) -> DependencyKind:
        return DependencyKind.VERSION_CONTROL


DependencyDescriptor: TypeAlias = (
    RegistryDependency | PathDependency | VersionControlDependency
)


class PartialMetadata(msgspec.Struct, frozen=True, kw_only=True):
    """Registry metadata where any field may be unknown."""

    description: str | None = None
    authors: tuple[str, ...] = ()
    repository: str | None = None
    homepage: str | None = None

    @property
    def is_empty(self) -> bool:
        """Check whether no field is known."""
        return not (self.description or self.authors or self.repository or self.homepage)


class EnrichmentResult(msgspec.Struct, frozen=True, kw_only=True):
    """Outcome of one registry lookup.

    A failed lookup carries ``error`` and empty ``metadata``; callers read
    ``ok`` instead of catching exceptions.
    """

    name: str
    metadata: PartialMetadata = msgspec.field(default_factory=PartialMetadata)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the lookup succeeded."""
        return self.error is None

    @classmethod
    def failed(cls, name: str, error: str) -> "EnrichmentResult":
        """Build a failed result with no metadata."""
        return cls(name=name, error=error)


class BibEntry(msgspec.Struct, frozen=True, kw_only=True):
    """A rendered BibTeX record.

    ``fields`` is an ordered tuple of ``(name, value)`` pairs; the encoder
    emits them in this order.
    """

    key: str
    fields: tuple[tuple[str, str], ...]
    type: EntryType = EntryType.MISC

    def get(self, name: str) -> str | None:
        """Return the value of a field, or None when absent."""
        for field, value in self.fields:
            if field == name:
                return value
        return None

    def to_dict(self) -> dict[str, str]:
        """Convert fields to a dictionary."""
        return dict(self.fields)

    def to_bibtex(self) -> str:
        """Convert to BibTeX format."""
        from .bibtex import BibtexEncoder

        return BibtexEncoder().encode_entry(self)
