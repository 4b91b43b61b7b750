"""Services layer for business logic separation."""

from .repository import (
    BaseRepository,
    JSONFileRepository,
    MemoryRepository,
    SQLiteRepository,
    StorageBackend,
    create_repository,
)
from .card_store import CardStore
from .folder_store import FolderStore
from .cooldown import CooldownGate
from .translation_service import DisplayResult, TranslationPipeline, TranslationResult
from .library import FlashcardLibrary

__all__ = [
    'BaseRepository',
    'JSONFileRepository',
    'MemoryRepository',
    'SQLiteRepository',
    'StorageBackend',
    'create_repository',
    'CardStore',
    'FolderStore',
    'CooldownGate',
    'DisplayResult',
    'TranslationPipeline',
    'TranslationResult',
    'FlashcardLibrary',
]
