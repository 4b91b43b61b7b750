"""Language-specific configurations."""

# Supported BCP-47 tags offered by the language pickers
LANGUAGES = {
    "en-US": "English",
    "tr-TR": "Turkish",
    "de-DE": "German",
    "fr-FR": "French",
    "es-ES": "Spanish",
    "it-IT": "Italian",
    "pt-PT": "Portuguese",
    "ru-RU": "Russian",
    "uk-UA": "Ukrainian",
    "ar-SA": "Arabic",
    "ja-JP": "Japanese",
    "ko-KR": "Korean",
    "zh-CN": "Chinese",
    "nl-NL": "Dutch",
    "pl-PL": "Polish",
}


def is_supported(tag: str) -> bool:
    """Check whether a language tag belongs to the supported set."""
    return tag in LANGUAGES


def language_code(tag: str) -> str:
    """Two-letter code preceding the region subtag (en-US -> en)."""
    return str(tag).split("-")[0]


def language_label(tag: str) -> str:
    return LANGUAGES.get(tag, tag)
