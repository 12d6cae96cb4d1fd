"""Citation rendering for crates and their dependencies.

Turns ``ProjectMetadata`` and classified dependencies into ``BibEntry``
records. Rendering is deterministic: the same input and the same
enrichment results always give the same entries, apart from the
``year`` and ``month`` fields which record the (UTC) date of rendering.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime, timezone
from typing import assert_never

from cratecite.core.bibtex import BibtexEncoder
from cratecite.core.fields import MONTH_MACROS
from cratecite.core.models import (
    BibEntry,
    DependencyDescriptor,
    EnrichmentResult,
    PartialMetadata,
    PathDependency,
    ProjectMetadata,
    RegistryDependency,
    VersionControlDependency,
)

from .keys import CitationKeyGenerator

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_SITE = "https://crates.io/crates"
GIT_DEPENDENCY_NOTE = "Git dependency"
PATH_DEPENDENCY_NOTE = "Local path dependency"

Enricher = Callable[[str], EnrichmentResult]


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def join_authors(authors: Iterable[str]) -> str | None:
    """Join author names the BibTeX way, or None when there are none."""
    names = [name for name in authors if name]
    return " and ".join(names) if names else None


class CitationRenderer:
    """Render BibTeX entries for a crate or its dependencies."""

    def __init__(
        self,
        key_prefix: str | None = "rust",
        registry_site: str = DEFAULT_REGISTRY_SITE,
        today: Callable[[], date] = utc_today,
    ):
        """Initialize renderer.

        Args:
            key_prefix: Ecosystem prefix of dependency keys
            registry_site: Base URL of the registry's crate pages
            today: Clock used for the year and month fields
        """
        self.key_prefix = key_prefix
        self.registry_site = registry_site.rstrip("/")
        self.today = today
        self.encoder = BibtexEncoder()

    def listing_url(self, name: str) -> str:
        """Registry page of a crate."""
        return f"{self.registry_site}/{name}"

    def _date_fields(self) -> list[tuple[str, str]]:
        today = self.today()
        return [("year", str(today.year)), ("month", MONTH_MACROS[today.month - 1])]

    def render_project(self, meta: ProjectMetadata) -> BibEntry:
        """Render the citation of the crate itself."""
        keys = CitationKeyGenerator(prefix=None)
        fields = [
            ("title", meta.name),
            ("note", meta.description),
            ("author", join_authors(meta.authors)),
            ("url", meta.repository or meta.homepage),
            ("version", meta.version),
            *self._date_fields(),
            ("keywords", ", ".join(meta.keywords) or None),
        ]
        return BibEntry(key=keys.generate(meta.name), fields=_present(fields))

    def render_dependencies(
        self,
        descriptors: Sequence[DependencyDescriptor],
        enrich: Enricher | None = None,
    ) -> list[BibEntry]:
        """Render one entry per dependency, in the given order.

        Args:
            descriptors: Classified dependencies
            enrich: Registry lookup applied to registry dependencies only;
                skipped when None
        """
        keys = CitationKeyGenerator(prefix=self.key_prefix)
        entries = []
        for descriptor in descriptors:
            fields = self.dependency_fields(descriptor, enrich)
            entries.append(BibEntry(key=keys.generate(descriptor.name), fields=fields))
        return entries

    def dependency_fields(
        self, descriptor: DependencyDescriptor, enrich: Enricher | None = None
    ) -> tuple[tuple[str, str], ...]:
        """Compute the ordered fields of one dependency entry."""
        match descriptor:
            case RegistryDependency(name=name):
                metadata = PartialMetadata()
                if enrich is not None:
                    result = enrich(name)
                    if result.ok:
                        metadata = result.metadata
                    else:
                        logger.debug(f"Using local data only for {name}")
                listing = self.listing_url(name)
                note = metadata.description
                url = metadata.repository or metadata.homepage or listing
                howpublished = listing
                authors = metadata.authors
            case PathDependency():
                note = PATH_DEPENDENCY_NOTE
                url = None
                howpublished = None
                authors = ()
            case VersionControlDependency(url=vcs_url):
                note = GIT_DEPENDENCY_NOTE
                url = vcs_url
                howpublished = None
                authors = ()
            case _:
                assert_never(descriptor)

        fields = [
            ("title", descriptor.name),
            ("note", note),
            ("author", join_authors(authors)),
            ("url", url),
            ("version", descriptor.requirement),
            *self._date_fields(),
            ("howpublished", howpublished),
        ]
        return _present(fields)

    def render_text(self, entries: Iterable[BibEntry]) -> str:
        """Encode entries as one BibTeX document."""
        return self.encoder.encode_entries(entries)


def _present(fields: list[tuple[str, str | None]]) -> tuple[tuple[str, str], ...]:
    return tuple((name, value) for name, value in fields if value)
