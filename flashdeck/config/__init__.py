"""Configuration module for FlashDeck."""

from .settings import Config
from .languages import LANGUAGES, is_supported, language_code, language_label
from .colors import CARD_PALETTE, Colors, is_light_color
from .config_manager import SettingsManager

__all__ = [
    'Config',
    'LANGUAGES',
    'is_supported',
    'language_code',
    'language_label',
    'CARD_PALETTE',
    'Colors',
    'is_light_color',
    'SettingsManager',
]
