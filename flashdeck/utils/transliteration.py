"""Cyrillic to Latin transliteration for phonetic display."""

import re

CYRILLIC_TO_LATIN = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d",
    "е": "e", "ё": "yo", "ж": "zh", "з": "z", "и": "i",
    "й": "y", "к": "k", "л": "l", "м": "m", "н": "n",
    "о": "o", "п": "p", "р": "r", "с": "s", "т": "t",
    "у": "u", "ф": "f", "х": "h", "ц": "ts", "ч": "ch",
    "ш": "sh", "щ": "sch", "ъ": "", "ы": "y", "ь": "",
    "э": "e", "ю": "yu", "я": "ya",
    "А": "A", "Б": "B", "В": "V", "Г": "G", "Д": "D",
    "Е": "E", "Ё": "Yo", "Ж": "Zh", "З": "Z", "И": "I",
    "Й": "Y", "К": "K", "Л": "L", "М": "M", "Н": "N",
    "О": "O", "П": "P", "Р": "R", "С": "S", "Т": "T",
    "У": "U", "Ф": "F", "Х": "H", "Ц": "Ts", "Ч": "Ch",
    "Ш": "Sh", "Щ": "Sch", "Ъ": "", "Ы": "Y", "Ь": "",
    "Э": "E", "Ю": "Yu", "Я": "Ya",
}

# Cyrillic and Cyrillic Supplement blocks
CYRILLIC_PATTERN = re.compile('[\u0400-\u052F]')


def has_cyrillic(text: str) -> bool:
    """Check whether text contains any Cyrillic code point."""
    if not text:
        return False
    return CYRILLIC_PATTERN.search(str(text)) is not None


def transliterate(text: str) -> str:
    """
    Map Cyrillic letters to a Latin phonetic approximation.

    Works one code point at a time; characters missing from the table
    (including all non-Cyrillic text) pass through unchanged.

    Args:
        text: Input text

    Returns:
        Transliterated text
    """
    if not text:
        return ""
    return "".join(CYRILLIC_TO_LATIN.get(ch, ch) for ch in str(text))
