"""Data models for FlashDeck."""

from .card import Flashcard, Folder

__all__ = ['Flashcard', 'Folder']
