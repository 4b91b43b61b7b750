"""
Folder Store - canonical collection of folders.

Deleting a folder never deletes cards: its cards are moved to "no folder"
through CardStore.reassign_folder.

Known consistency gap: persistence is whole-collection rewrite with no
transaction log. delete_cascade persists the folder removal first and the
card reassignment second. If the second write fails, cards keep a dangling
folder id until delete_cascade is called again for that id. CardStore reads
such cards as unfiled in the meantime.
"""

import logging
from typing import List, Optional, Set

from ..config import Config
from ..exceptions import StorageError, ValidationError
from ..models import Folder
from ..utils.helpers import IdGenerator
from ..utils.parsing import TextParser
from .card_store import CardStore
from .repository import BaseRepository

logger = logging.getLogger(__name__)

FOLDERS_KEY = "folders"


class FolderStore:
    """Store for folders."""

    def __init__(
        self,
        repository: BaseRepository,
        card_store: CardStore,
        id_generator: Optional[IdGenerator] = None,
        max_name_length: int = Config.MAX_FOLDER_NAME_LENGTH,
    ):
        self.repository = repository
        self.card_store = card_store
        self.max_name_length = max_name_length
        self._ids = id_generator or IdGenerator()
        self._seeded = False

    def _load(self) -> List[Folder]:
        return self.repository.load_records(FOLDERS_KEY, Folder.from_dict)

    def _persist(self, folders: List[Folder]) -> None:
        self.repository.save_json(FOLDERS_KEY, [folder.to_dict() for folder in folders])

    def _clean_name(self, name: str) -> str:
        cleaned = TextParser.clean_field(name)
        if len(cleaned) > self.max_name_length:
            raise ValidationError(
                f"Folder name cannot be longer than {self.max_name_length} characters"
            )
        return cleaned

    def _next_id(self, existing: List[Folder]) -> str:
        if not self._seeded:
            numeric = [int(folder.id) for folder in existing if folder.id.isdigit()]
            self._ids.seed(max(numeric, default=None))
            self._seeded = True
        return str(self._ids.next_id())

    def list_all(self) -> List[Folder]:
        return self._load()

    def get(self, folder_id: str) -> Optional[Folder]:
        for folder in self._load():
            if folder.id == folder_id:
                return folder
        return None

    def ids(self) -> Set[str]:
        """Ids of all existing folders."""
        return {folder.id for folder in self._load()}

    def create(self, name: str) -> Folder:
        """
        Create a folder.

        Raises:
            ValidationError: If the trimmed name is empty or too long
        """
        if TextParser.is_blank(name):
            raise ValidationError("Folder name cannot be empty")
        cleaned = self._clean_name(name)

        folders = self._load()
        folder_id = self._next_id(folders)
        folder = Folder(id=folder_id, name=cleaned, created_at=int(folder_id))
        folders.append(folder)
        self._persist(folders)
        logger.info("Created folder %s (%s)", folder.id, folder.name)
        return folder

    def rename(self, folder_id: str, new_name: str) -> Optional[Folder]:
        """
        Rename a folder.

        A blank name is treated as a cancelled rename and changes nothing.
        Unknown ids are ignored.

        Returns:
            The renamed folder, or None when nothing changed
        """
        if TextParser.is_blank(new_name):
            return None
        cleaned = self._clean_name(new_name)

        folders = self._load()
        for folder in folders:
            if folder.id == folder_id:
                folder.name = cleaned
                self._persist(folders)
                logger.info("Renamed folder %s to %s", folder_id, cleaned)
                return folder
        return None

    def delete_cascade(self, folder_id: str) -> None:
        """
        Delete a folder and move its cards to "no folder".

        Step 1 persists the folder removal, step 2 reassigns the cards.
        Step 2 also runs when the folder is already gone, which repairs
        cards left dangling by an earlier failed cascade. A StorageError in
        step 2 propagates and step 1 is not rolled back.
        """
        folders = self._load()
        remaining = [folder for folder in folders if folder.id != folder_id]
        if len(remaining) != len(folders):
            self._persist(remaining)
            logger.info("Deleted folder %s", folder_id)

        try:
            self.card_store.reassign_folder(folder_id, None)
        except StorageError:
            logger.error(
                "Folder %s removed but its cards were not reassigned; "
                "run the delete again to repair", folder_id
            )
            raise
