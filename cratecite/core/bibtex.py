"""BibTeX format encoding.

This module converts ``BibEntry`` records into BibTeX text. The output
follows standard BibTeX conventions for special character escaping and
entry structure: one field per line, four-space indentation, and no
trailing comma after the last field.

Key components:
- BibtexEncoder: Converts BibEntry objects to BibTeX format
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .fields import FIELD_ORDER, MONTH_MACROS, VERBATIM_FIELDS

if TYPE_CHECKING:
    from .models import BibEntry


class BibtexEncoder:
    """Encode BibEntry objects to BibTeX format.

    Handles special character escaping and field ordering. Field values
    are plain text, so braces are escaped as well and every entry stays
    balanced. URL fields are emitted verbatim.
    """

    SPECIAL_CHARS = {
        "\\": "\\textbackslash{}",
        "{": "\\{",
        "}": "\\}",
        "$": "\\$",
        "&": "\\&",
        "#": "\\#",
        "_": "\\_",
        "%": "\\%",
        "~": "\\~{}",
        "^": "\\^{}",
    }

    # Single pass, so replacement text is never escaped again
    _TRANSLATION = str.maketrans(SPECIAL_CHARS)

    def escape(self, text: str) -> str:
        """Escape special LaTeX characters for BibTeX.

        Args:
            text: Text to escape.

        Returns:
            Text with special characters escaped.
        """
        if not text:
            return text

        return text.translate(self._TRANSLATION)

    def order_fields(
        self, fields: Iterable[tuple[str, str]]
    ) -> list[tuple[str, str]]:
        """Sort fields into emission order.

        Known fields follow ``FIELD_ORDER``; unknown ones keep their
        relative order after them.
        """
        rank = {name: index for index, name in enumerate(FIELD_ORDER)}
        indexed = list(enumerate(fields))
        indexed.sort(key=lambda item: (rank.get(item[1][0], len(rank)), item[0]))
        return [field for _, field in indexed]

    def encode_entry(self, entry: "BibEntry") -> str:
        """Encode a single entry to BibTeX format.

        Args:
            entry: Entry to encode.

        Returns:
            BibTeX formatted string without a trailing newline.
        """
        lines = [f"@{entry.type.value}{{{entry.key},"]

        for field, value in self.order_fields(entry.fields):
            if value is None or value == "":
                continue

            if field == "month" and value in MONTH_MACROS:
                lines.append(f"    {field} = {value},")
                continue
            if field == "year" or field in VERBATIM_FIELDS:
                lines.append(f"    {field} = {{{value}}},")
                continue

            escaped_value = self.escape(str(value))
            lines.append(f"    {field} = {{{escaped_value}}},")

        if lines[-1].endswith(","):
            lines[-1] = lines[-1][:-1]

        lines.append("}")
        return "\n".join(lines)

    def encode_entries(self, entries: Iterable["BibEntry"]) -> str:
        """Encode several entries as one document.

        Entries are separated by a blank line and the document ends with
        a newline. An empty batch encodes to an empty string.
        """
        blocks = [self.encode_entry(entry) for entry in entries]
        if not blocks:
            return ""
        return "\n\n".join(blocks) + "\n"
