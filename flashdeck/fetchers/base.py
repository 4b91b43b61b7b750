"""Base translator class."""

from abc import ABC, abstractmethod


class BaseTranslator(ABC):
    """
    Abstract base class for remote translation providers.

    Provides lifecycle management and async context manager support.
    Subclasses implement call() and optionally override close().
    """

    @abstractmethod
    async def call(self, text: str, source_code: str, target_code: str) -> str:
        """
        Translate text with the remote provider.

        Args:
            text: Text to translate
            source_code: Two-letter source language code
            target_code: Two-letter target language code

        Returns:
            Translated text

        Raises:
            NetworkError: Provider unreachable or timed out
            ProviderError: Provider answered with an error
        """
        pass

    async def close(self) -> None:
        """Close any open resources (sessions, connections, etc.)."""
        pass

    async def __aenter__(self) -> "BaseTranslator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - ensure resources are closed."""
        await self.close()
