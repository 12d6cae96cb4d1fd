"""Citation key generation with collision handling."""

from __future__ import annotations

import re
import unicodedata


class KeyValidator:
    """Validates and sanitizes citation keys.

    Valid keys contain only ASCII letters, digits and hyphens.
    """

    INVALID_CHARS = re.compile(r"[^A-Za-z0-9-]")
    VALID_KEY = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*$")

    def is_valid(self, key: str) -> bool:
        """Check if key is valid."""
        return bool(key) and bool(self.VALID_KEY.match(key))

    def sanitize(self, text: str) -> str:
        """Sanitize text into a key component.

        Every character other than an ASCII alphanumeric or hyphen becomes
        a hyphen. Leading and trailing hyphens are dropped.
        """
        text = self._transliterate(text or "")
        key = self.INVALID_CHARS.sub("-", text).strip("-")
        return key or "unnamed"

    def _transliterate(self, text: str) -> str:
        """Transliterate Unicode to ASCII."""
        replacements = {
            "ä": "ae",
            "ö": "oe",
            "ü": "ue",
            "Ä": "Ae",
            "Ö": "Oe",
            "Ü": "Ue",
            "ß": "ss",
            "æ": "ae",
            "ø": "o",
            "å": "a",
            "Æ": "AE",
            "Ø": "O",
            "Å": "A",
        }

        for old, new in replacements.items():
            text = text.replace(old, new)

        # Normalize and remove remaining accents
        nfd = unicodedata.normalize("NFD", text)
        return "".join(char for char in nfd if unicodedata.category(char) != "Mn")


class CitationKeyGenerator:
    """Generates ``<prefix>-<sanitized-name>`` keys, unique per batch.

    The generator remembers every key it handed out; a repeated key gets a
    ``-2``, ``-3``, ... suffix. Call ``reset`` to start a new batch.
    """

    def __init__(self, prefix: str | None = "rust"):
        """Initialize key generator.

        Args:
            prefix: Ecosystem prefix, or None for bare keys
        """
        self.validator = KeyValidator()
        self.prefix = self.validator.sanitize(prefix) if prefix else None
        self._generated_keys: set[str] = set()

    def base_key(self, name: str) -> str:
        """Deterministic key for ``name`` before collision handling."""
        sanitized = self.validator.sanitize(name)
        if self.prefix:
            return f"{self.prefix}-{sanitized}"
        return sanitized

    def generate(self, name: str) -> str:
        """Generate a key for ``name`` that is unique within the batch."""
        base = self.base_key(name)
        key = base
        counter = 2
        while key in self._generated_keys:
            key = f"{base}-{counter}"
            counter += 1

        self._generated_keys.add(key)
        return key

    def reset(self) -> None:
        """Forget previously generated keys."""
        self._generated_keys.clear()
