"""
Translation Service - translate-and-normalize pipeline.

One translate() call runs Idle -> Requesting -> Succeeded | Failed. The
cooldown gate is orthogonal to that cycle: only a successful request
closes it, for a fixed window.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from ..config import Config, language_code
from ..exceptions import InputTooLongError, RateLimitedError, ValidationError
from ..fetchers.base import BaseTranslator
from ..utils.parsing import TextParser
from ..utils.transliteration import has_cyrillic, transliterate
from .cooldown import CooldownGate

logger = logging.getLogger(__name__)


@dataclass
class TranslationResult:
    """Raw outcome of one successful translation request."""
    source_text: str
    translated_text: str
    from_lang: str
    to_lang: str


class DisplayResult(NamedTuple):
    """Translated text plus its Latin transliteration, if it has Cyrillic."""
    translated: str
    transliterated: Optional[str] = None

    @property
    def label(self) -> str:
        """Display string, e.g. "привет (privet)"."""
        if self.transliterated is None:
            return self.translated
        return f"{self.translated} ({self.transliterated})"


class TranslationPipeline:
    """
    Compose the translation client, the cooldown gate and the transliterator.

    Usage:
        async with GoogleTranslateClient(api_key) as client:
            pipeline = TranslationPipeline(client)
            result = await pipeline.translate("hello", "en-US", "ru-RU")
            display = pipeline.post_process(result.translated_text)
    """

    def __init__(
        self,
        client: BaseTranslator,
        gate: Optional[CooldownGate] = None,
        max_chars: int = Config.MAX_TRANSLATE_CHARS,
    ):
        self.client = client
        self.gate = gate or CooldownGate(Config.TRANSLATE_COOLDOWN)
        self.max_chars = max_chars

    @property
    def is_cooling(self) -> bool:
        return self.gate.is_cooling

    @property
    def cooldown_remaining(self) -> float:
        return self.gate.remaining()

    def check_input(self, text: str) -> str:
        """
        Validate translation input before anything else happens.

        Returns:
            Trimmed text

        Raises:
            ValidationError: Blank input
            InputTooLongError: More than max_chars characters
        """
        if not text or not text.strip():
            raise ValidationError("Enter text to translate")
        if len(text) > self.max_chars:
            raise InputTooLongError(len(text), self.max_chars)
        return text.strip()

    async def translate(self, text: str, from_lang: str, to_lang: str) -> TranslationResult:
        """
        Translate text between two language tags.

        Input checks run first, then the cooldown gate; only then is the
        provider called. A success starts the cooldown; a failure does not.

        Raises:
            ValidationError, InputTooLongError, RateLimitedError,
            NetworkError, ProviderError
        """
        cleaned = self.check_input(text)

        if not self.gate.try_acquire():
            if self.gate.in_flight:
                logger.info("Translation rejected, another request is in flight")
                raise RateLimitedError(in_flight=True)
            retry_after = self.gate.remaining()
            logger.info("Translation rejected, cooling down (%.1fs left)", retry_after)
            raise RateLimitedError(retry_after)

        try:
            translated = await self.client.call(
                cleaned, language_code(from_lang), language_code(to_lang)
            )
        except BaseException:
            self.gate.release()
            raise

        self.gate.arm()
        logger.debug("Translated %d chars %s -> %s", len(cleaned), from_lang, to_lang)
        return TranslationResult(
            source_text=cleaned,
            translated_text=translated,
            from_lang=from_lang,
            to_lang=to_lang,
        )

    @staticmethod
    def post_process(translated: str) -> DisplayResult:
        """Attach a Latin transliteration when the text contains Cyrillic."""
        translated = TextParser.normalize_unicode(translated)
        if has_cyrillic(translated):
            return DisplayResult(translated, transliterate(translated))
        return DisplayResult(translated, None)

    async def translate_for_display(self, text: str, from_lang: str, to_lang: str) -> DisplayResult:
        result = await self.translate(text, from_lang, to_lang)
        return self.post_process(result.translated_text)
