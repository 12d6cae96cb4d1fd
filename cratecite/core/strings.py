"""Small string helpers shared by manifest and registry readers."""

from typing import Any


def clean_text(value: Any) -> str | None:
    """Return a stripped string, or None for blanks and non-strings.

    Non-string values cover workspace-inherited tables such as
    ``version.workspace = true`` and nulls in registry payloads.
    """
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
