"""Text parsing utilities for consistent text processing across the application."""

import unicodedata


class TextParser:
    """
    Centralized text parsing utilities.

    Single source of truth for how user-entered card and translation text
    is normalized before it is validated or stored.
    """

    @classmethod
    def normalize_unicode(cls, text: str) -> str:
        """
        Normalize text to NFC form for consistent Unicode handling.

        Prevents issues with characters like ё being represented as
        either a single codepoint (NFC) or base + combining mark (NFD).

        Args:
            text: Input text

        Returns:
            NFC-normalized text
        """
        if not text:
            return ""
        return unicodedata.normalize('NFC', str(text))

    @classmethod
    def clean_field(cls, text: str) -> str:
        """Trim and NFC-normalize a text field."""
        return cls.normalize_unicode(text).strip()

    @classmethod
    def is_blank(cls, text: str) -> bool:
        """True for None, empty or whitespace-only text."""
        return not text or not str(text).strip()
