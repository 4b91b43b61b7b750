"""Google Cloud Translation (v2) client."""

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from ..config import Config
from ..exceptions import NetworkError, ProviderError
from .base import BaseTranslator

logger = logging.getLogger(__name__)


class GoogleTranslateClient(BaseTranslator):
    """Translate text via the Google Translation v2 REST endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key sent as the `key` query parameter
            endpoint: Translation endpoint URL
            timeout: Total request timeout in seconds
        """
        self.api_key = api_key if api_key is not None else Config.GOOGLE_TRANSLATE_API_KEY
        self.endpoint = endpoint or Config.TRANSLATE_API_URL
        self.timeout = timeout if timeout is not None else Config.TRANSLATE_TIMEOUT
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    @staticmethod
    def _extract_error(data: Any) -> Optional[str]:
        if isinstance(data, dict) and data.get("error") is not None:
            error = data["error"]
            if isinstance(error, dict):
                return error.get("message") or ProviderError.GENERIC_MESSAGE
            return str(error) or ProviderError.GENERIC_MESSAGE
        return None

    @staticmethod
    def _extract_translation(data: Any) -> str:
        try:
            return data["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError):
            raise ProviderError("Unexpected response from translation provider")

    async def call(self, text: str, source_code: str, target_code: str) -> str:
        """Translate text using the v2 `translate` method."""
        session = await self._get_session()

        payload = {
            "q": text,
            "source": source_code,
            "target": target_code,
            "format": "text",
        }
        params = {"key": self.api_key} if self.api_key else None

        try:
            async with session.post(self.endpoint, params=params, json=payload) as response:
                body = await response.text()
                status = response.status
        except asyncio.TimeoutError as e:
            logger.warning("Translation request timed out after %ss", self.timeout)
            raise NetworkError(f"Translation request timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            logger.warning("Translation request failed: %s", e)
            raise NetworkError(f"Could not reach translation provider: {e}") from e

        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            data = None

        message = self._extract_error(data)
        if message is not None:
            logger.warning("Translation provider error %s: %s", status, message)
            raise ProviderError(message, status=status)

        if status >= 400 or data is None:
            logger.warning("Translation provider returned HTTP %s: %s", status, body[:200])
            raise ProviderError(status=status)

        return self._extract_translation(data)
