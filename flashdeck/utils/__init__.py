"""Utils module."""

from .helpers import IdGenerator, now_ms
from .parsing import TextParser
from .transliteration import CYRILLIC_TO_LATIN, has_cyrillic, transliterate
from .logger import setup_logger

__all__ = [
    'IdGenerator',
    'now_ms',
    'TextParser',
    'CYRILLIC_TO_LATIN',
    'has_cyrillic',
    'transliterate',
    'setup_logger'
]
