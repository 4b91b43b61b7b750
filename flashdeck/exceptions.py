"""Error taxonomy shared by the stores, the translation pipeline and the CLI."""

from typing import Optional


class FlashdeckError(Exception):
    """Base class for all errors raised by FlashDeck."""


class ValidationError(FlashdeckError):
    """A required field (card text, folder name, language tag) is invalid."""


class InputTooLongError(FlashdeckError):
    """Translation input exceeds the character limit."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Text is too long ({length} characters). Maximum {limit} characters allowed.")


class RateLimitedError(FlashdeckError):
    """Translation attempted while the cooldown gate is closed."""

    IN_FLIGHT_MESSAGE = "A translation is already in progress. Please wait for it to finish."

    def __init__(self, retry_after: float = 0.0, in_flight: bool = False):
        self.retry_after = retry_after
        self.in_flight = in_flight
        if in_flight:
            message = self.IN_FLIGHT_MESSAGE
        else:
            message = f"Please wait {retry_after:.1f}s before translating again."
        super().__init__(message)


class TranslationError(FlashdeckError):
    """Base class for failures of the remote translation call."""


class NetworkError(TranslationError):
    """Transport failure: the provider could not be reached or timed out."""


class ProviderError(TranslationError):
    """The provider answered but declined to translate."""

    GENERIC_MESSAGE = "Could not translate text. Please try again."

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None):
        self.status = status
        super().__init__(message or self.GENERIC_MESSAGE)


class StorageError(FlashdeckError):
    """The persistence substrate failed to read or write."""
