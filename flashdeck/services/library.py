"""
Flashcard Library - application facade.

Wires the two stores and the translation pipeline together and implements
the card-creation flows the screens use.
"""

import logging
from typing import Optional

from ..config import Colors, Config, SettingsManager
from ..fetchers import BaseTranslator, GoogleTranslateClient
from ..models import Flashcard
from .card_store import CardStore
from .cooldown import CooldownGate
from .folder_store import FolderStore
from .repository import BaseRepository, StorageBackend, create_repository
from .translation_service import DisplayResult, TranslationPipeline, TranslationResult

logger = logging.getLogger(__name__)

LAST_SELECTED_FOLDER_KEY = "lastSelectedFolder"


class FlashcardLibrary:
    """
    Entry point for UIs.

    Usage:
        library = FlashcardLibrary.from_settings(SettingsManager())
        folder = library.folders.create("Animals")
        library.add_card("Cat", "Kedi", folder_id=folder.id)
        await library.close()
    """

    def __init__(
        self,
        repository: BaseRepository,
        translator: Optional[BaseTranslator] = None,
        gate: Optional[CooldownGate] = None,
    ):
        self.repository = repository
        self.cards = CardStore(repository, folder_ids=self._folder_ids)
        self.folders = FolderStore(repository, self.cards)
        self.client = translator or GoogleTranslateClient()
        self.translator = TranslationPipeline(self.client, gate=gate)

    def _folder_ids(self):
        return self.folders.ids()

    @classmethod
    def from_settings(cls, settings: SettingsManager) -> "FlashcardLibrary":
        """Build a library from persisted user settings."""
        backend = StorageBackend(settings.get("STORAGE_BACKEND", Config.STORAGE_BACKEND))
        if backend == StorageBackend.SQLITE:
            path = settings.get("DB_FILE", Config.DB_FILE)
        else:
            path = settings.get("STORAGE_FILE", Config.STORAGE_FILE)

        client = GoogleTranslateClient(
            api_key=settings.get("GOOGLE_TRANSLATE_API_KEY", ""),
            endpoint=settings.get("TRANSLATE_API_URL", Config.TRANSLATE_API_URL),
            timeout=settings.get("TRANSLATE_TIMEOUT", Config.TRANSLATE_TIMEOUT),
        )
        gate = CooldownGate(float(settings.get("TRANSLATE_COOLDOWN", Config.TRANSLATE_COOLDOWN)))
        return cls(create_repository(backend, path), translator=client, gate=gate)

    def add_card(
        self,
        front_text: str,
        back_text: str,
        front_color: str = Config.DEFAULT_FRONT_COLOR,
        back_color: str = Config.DEFAULT_BACK_COLOR,
        front_lang: str = Config.DEFAULT_FRONT_LANG,
        back_lang: str = Config.DEFAULT_BACK_LANG,
        folder_id: Optional[str] = None,
    ) -> Flashcard:
        """Create a card and clear the scratch folder selection."""
        card = self.cards.create(
            front_text,
            back_text,
            front_color=front_color,
            back_color=back_color,
            front_lang=front_lang,
            back_lang=back_lang,
            folder_id=folder_id,
        )
        self.repository.set(LAST_SELECTED_FOLDER_KEY, "")
        return card

    def save_translation(
        self,
        result: TranslationResult,
        display: Optional[DisplayResult] = None,
        folder_id: Optional[str] = None,
    ) -> Flashcard:
        """
        Turn a translation into a card.

        The front shows the translation (with transliteration), the back
        the original text.
        """
        display = display or TranslationPipeline.post_process(result.translated_text)
        card = self.cards.create(
            display.label,
            result.source_text,
            front_color=Colors.WHITE,
            back_color=Colors.SECONDARY,
            front_lang=result.to_lang,
            back_lang=result.from_lang,
            folder_id=folder_id,
        )
        logger.info("Saved translation as card %s", card.id)
        return card

    def delete_folder(self, folder_id: str) -> None:
        self.folders.delete_cascade(folder_id)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "FlashcardLibrary":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
