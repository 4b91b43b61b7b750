"""Fetchers module - remote translation providers."""

from .base import BaseTranslator
from .google import GoogleTranslateClient

__all__ = [
    'BaseTranslator',
    'GoogleTranslateClient',
]
