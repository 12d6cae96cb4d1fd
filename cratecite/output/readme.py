"""Managed README sections.

A managed section is wrapped in HTML comment markers so it can be found
again and replaced instead of appended twice.
"""

from __future__ import annotations

BEGIN_FMT = "<!-- cratecite:begin:{key} -->"
END_FMT = "<!-- cratecite:end:{key} -->"

CITING_SECTION = """## Citing

If you found this software useful consider citing it. See {filename} for the recommended BibTeX entry."""


def citing_section(filename: str = "CITATION.bib") -> str:
    """Body of the README "Citing" section."""
    return CITING_SECTION.format(filename=filename)


def wrap(body: str, key: str = "citing") -> str:
    """Wrap a section body with managed markers."""
    begin = BEGIN_FMT.format(key=key)
    end = END_FMT.format(key=key)
    return f"{begin}\n{body.strip()}\n{end}"


def merge_section(original: str, body: str, key: str = "citing") -> str:
    """Insert or replace a managed section in a document.

    When both markers for ``key`` are present the text between them is
    replaced and everything else is kept byte for byte. A section is the
    first end marker paired with the closest begin marker before it, so
    stray markers elsewhere never widen the replaced span. Otherwise the
    wrapped section is appended at the end, separated by a blank line.
    The result always ends with a newline.
    """
    begin = BEGIN_FMT.format(key=key)
    end = END_FMT.format(key=key)

    start, stop = _find_section(original, begin, end)
    if start != -1:
        pre = original[:start]
        post = original[stop + len(end) :]
        updated = f"{pre}{wrap(body, key)}{post}"
    elif original.strip():
        updated = f"{original.rstrip()}\n\n{wrap(body, key)}\n"
    else:
        updated = f"{wrap(body, key)}\n"

    if not updated.endswith("\n"):
        updated += "\n"
    return updated


def _find_section(text: str, begin: str, end: str) -> tuple[int, int]:
    """Offsets of the first complete ``begin``..``end`` pair, or (-1, -1)."""
    search = 0
    while (stop := text.find(end, search)) != -1:
        start = text.rfind(begin, search, stop)
        if start != -1:
            return start, stop
        search = stop + len(end)
    return -1, -1
