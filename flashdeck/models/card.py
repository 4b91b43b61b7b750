"""Data models for FlashDeck."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Flashcard:
    """Two-sided card with display colors and spoken-language tags."""

    id: int
    front_text: str
    back_text: str
    front_color: str
    back_color: str
    front_lang: str
    back_lang: str

    # Weak reference by id; None means unfiled
    folder_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the persisted field names."""
        return {
            "id": self.id,
            "frontText": self.front_text,
            "backText": self.back_text,
            "frontColor": self.front_color,
            "backColor": self.back_color,
            "frontLang": self.front_lang,
            "backLang": self.back_lang,
            "folderId": self.folder_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Flashcard":
        """Build a card from a persisted record. Missing folderId means unfiled."""
        return cls(
            id=int(data["id"]),
            front_text=data.get("frontText", ""),
            back_text=data.get("backText", ""),
            front_color=data.get("frontColor", ""),
            back_color=data.get("backColor", ""),
            front_lang=data.get("frontLang", ""),
            back_lang=data.get("backLang", ""),
            folder_id=data.get("folderId") or None,
        )


@dataclass
class Folder:
    """Named grouping of cards."""

    id: str
    name: str
    created_at: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Folder":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            created_at=int(data.get("createdAt") or 0),
        )
