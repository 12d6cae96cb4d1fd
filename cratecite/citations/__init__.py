"""Citation key generation and BibTeX rendering."""

from cratecite.citations.keys import CitationKeyGenerator, KeyValidator
from cratecite.citations.renderer import (
    GIT_DEPENDENCY_NOTE,
    PATH_DEPENDENCY_NOTE,
    CitationRenderer,
    join_authors,
    utc_today,
)

__all__ = [
    # Keys
    "CitationKeyGenerator",
    "KeyValidator",
    # Rendering
    "CitationRenderer",
    "GIT_DEPENDENCY_NOTE",
    "PATH_DEPENDENCY_NOTE",
    "join_authors",
    "utc_today",
]
