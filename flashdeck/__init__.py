"""FlashDeck - personal flashcard manager with machine translation"""

__version__ = "1.0.0"
__author__ = "FlashDeck Team"

from .config import Config, LANGUAGES
from .models import Flashcard, Folder
from .services import CardStore, FolderStore, FlashcardLibrary, TranslationPipeline
from .fetchers import GoogleTranslateClient

__all__ = [
    'Config',
    'LANGUAGES',
    'Flashcard',
    'Folder',
    'CardStore',
    'FolderStore',
    'FlashcardLibrary',
    'TranslationPipeline',
    'GoogleTranslateClient',
]
