"""
Card Store - canonical collection of flashcards.

Every mutation is a whole-collection read-modify-persist under the
"flashcards" key. Cards reference folders by id only; the store never
owns folders.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..config import Config, is_supported
from ..exceptions import ValidationError
from ..models import Flashcard
from ..utils.helpers import IdGenerator
from ..utils.parsing import TextParser
from .repository import BaseRepository

logger = logging.getLogger(__name__)

FLASHCARDS_KEY = "flashcards"


class CardStore:
    """
    Store for flashcards.

    Usage:
        cards = CardStore(repository, folder_ids=folders.ids)
        card = cards.create("Cat", "Kedi")
        cards.filter_by_folder(None)
    """

    def __init__(
        self,
        repository: BaseRepository,
        folder_ids: Optional[Callable[[], Iterable[str]]] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        """
        Initialize card store.

        Args:
            repository: Key-value persistence substrate
            folder_ids: Returns ids of existing folders; enables treating
                        cards with a dangling folder id as unfiled
            id_generator: Source of card ids
        """
        self.repository = repository
        self._folder_ids = folder_ids
        self._ids = id_generator or IdGenerator()
        self._seeded = False

    def _load(self) -> List[Flashcard]:
        return self.repository.load_records(FLASHCARDS_KEY, Flashcard.from_dict)

    def _persist(self, cards: List[Flashcard]) -> None:
        self.repository.save_json(FLASHCARDS_KEY, [card.to_dict() for card in cards])

    def _live_folders(self) -> Optional[set]:
        if self._folder_ids is None:
            return None
        return set(self._folder_ids())

    def _effective_folder(self, card: Flashcard, live: Optional[set]) -> Optional[str]:
        """Folder a card is shown under: dangling references read as unfiled."""
        if card.folder_id is None:
            return None
        if live is not None and card.folder_id not in live:
            return None
        return card.folder_id

    def list_all(self) -> List[Flashcard]:
        """All persisted cards; empty when nothing has been stored yet."""
        return self._load()

    def get(self, card_id: int) -> Optional[Flashcard]:
        for card in self._load():
            if card.id == card_id:
                return card
        return None

    def validate(self, card: Flashcard) -> None:
        """Raise ValidationError unless both sides and languages are usable."""
        if TextParser.is_blank(card.front_text) or TextParser.is_blank(card.back_text):
            raise ValidationError("Front and back of the card cannot be empty.")
        for tag in (card.front_lang, card.back_lang):
            if not is_supported(tag):
                raise ValidationError(f"Unsupported language: {tag}")

    def append(self, card: Flashcard) -> None:
        """
        Validate and append a card, then persist the whole collection.

        Texts are stored trimmed. Nothing is written when validation fails.

        Raises:
            ValidationError: Blank side, unsupported language or an id that
                             is already stored
        """
        self.validate(card)
        cards = self._load()
        if any(existing.id == card.id for existing in cards):
            raise ValidationError(f"A card with id {card.id} already exists")

        card.front_text = TextParser.clean_field(card.front_text)
        card.back_text = TextParser.clean_field(card.back_text)
        cards.append(card)
        self._persist(cards)
        self._ids.seed(card.id)
        logger.info("Added card %s (folder=%s)", card.id, card.folder_id)

    def next_id(self) -> int:
        if not self._seeded:
            self._ids.seed(max((card.id for card in self._load()), default=None))
            self._seeded = True
        return self._ids.next_id()

    def create(
        self,
        front_text: str,
        back_text: str,
        front_color: str = Config.DEFAULT_FRONT_COLOR,
        back_color: str = Config.DEFAULT_BACK_COLOR,
        front_lang: str = Config.DEFAULT_FRONT_LANG,
        back_lang: str = Config.DEFAULT_BACK_LANG,
        folder_id: Optional[str] = None,
    ) -> Flashcard:
        """Build a card with a fresh id and append it."""
        card = Flashcard(
            id=self.next_id(),
            front_text=front_text,
            back_text=back_text,
            front_color=front_color,
            back_color=back_color,
            front_lang=front_lang,
            back_lang=back_lang,
            folder_id=folder_id or None,
        )
        self.append(card)
        return card

    def delete_all(self) -> None:
        """Clear the entire collection."""
        self.repository.remove(FLASHCARDS_KEY)
        logger.info("Deleted all cards")

    def delete_by_id(self, card_id: int) -> None:
        """Remove one card. Unknown ids are ignored."""
        cards = self._load()
        remaining = [card for card in cards if card.id != card_id]
        if len(remaining) == len(cards):
            return
        self._persist(remaining)
        logger.info("Deleted card %s", card_id)

    def filter_by_folder(self, folder_id: Optional[str]) -> List[Flashcard]:
        """
        Cards in a folder, or unfiled cards when folder_id is None.

        Matching is exact. Cards pointing at a folder that no longer exists
        are returned with the unfiled cards.
        """
        live = self._live_folders()
        return [
            card for card in self._load()
            if self._effective_folder(card, live) == folder_id
        ]

    def count_by_folder(self) -> Dict[Optional[str], int]:
        """Number of cards per folder id (None for unfiled)."""
        live = self._live_folders()
        counts: Dict[Optional[str], int] = {}
        for card in self._load():
            folder = self._effective_folder(card, live)
            counts[folder] = counts.get(folder, 0) + 1
        return counts

    def reassign_folder(self, old_folder_id: str, new_folder_id: Optional[str]) -> int:
        """
        Move every card of old_folder_id to new_folder_id.

        Used by folder cascade-delete. Persists only when a card changed.

        Returns:
            Number of cards moved
        """
        cards = self._load()
        moved = 0
        for card in cards:
            if card.folder_id == old_folder_id:
                card.folder_id = new_folder_id
                moved += 1
        if moved:
            self._persist(cards)
            logger.info("Moved %d card(s) from folder %s to %s", moved, old_folder_id, new_folder_id)
        return moved
