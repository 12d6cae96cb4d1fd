"""Core domain models and BibTeX encoding for crate citations."""

from cratecite.core.bibtex import BibtexEncoder
from cratecite.core.exceptions import (
    AlreadyExistsError,
    CiteError,
    EnrichmentError,
    ManifestParseError,
    NotFoundError,
    WriteError,
)
from cratecite.core.fields import FIELD_ORDER, EntryType
from cratecite.core.models import (
    BibEntry,
    DependencyDescriptor,
    DependencyKind,
    EnrichmentResult,
    ManifestDocument,
    PartialMetadata,
    PathDependency,
    ProjectMetadata,
    RegistryDependency,
    VersionControlDependency,
)

__all__ = [
    # Fields
    "EntryType",
    "FIELD_ORDER",
    # BibTeX processing
    "BibtexEncoder",
    # Models
    "BibEntry",
    "DependencyDescriptor",
    "DependencyKind",
    "EnrichmentResult",
    "ManifestDocument",
    "PartialMetadata",
    "PathDependency",
    "ProjectMetadata",
    "RegistryDependency",
    "VersionControlDependency",
    # Errors
    "CiteError",
    "NotFoundError",
    "AlreadyExistsError",
    "ManifestParseError",
    "EnrichmentError",
    "WriteError",
]
