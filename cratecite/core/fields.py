"""BibTeX field definitions for software citations."""

from enum import Enum, unique


@unique
class EntryType(Enum):
    """BibTeX entry types produced for software.

    Software has no dedicated type in classic BibTeX, so every record is
    emitted as ``@misc``.
    """

    MISC = "misc"


# Emission order for every rendered entry
FIELD_ORDER = (
    "title",
    "note",
    "author",
    "url",
    "version",
    "year",
    "month",
    "howpublished",
    "keywords",
)

# Fields whose values are emitted verbatim (no LaTeX escaping)
VERBATIM_FIELDS = frozenset({"url", "howpublished"})

MONTH_MACROS = (
    "jan",
    "feb",
    "mar",
    "apr",
    "may",
    "jun",
    "jul",
    "aug",
    "sep",
    "oct",
    "nov",
    "dec",
)
