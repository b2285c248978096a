"""
HTTP Translation Provider

Posts ``{"context": ..., "text": ...}`` (or ``{"context": ..., "texts": [...]}``
in segment mode) to a translation endpoint and reads ``translation`` /
``translations`` from the JSON response.
"""

from typing import List, Optional

import httpx

from config.logging_config import get_logger
from ..errors import ConfigurationError, ProviderError
from .base import BaseTranslationProvider

logger = get_logger(__name__)


class HttpTranslationProvider(BaseTranslationProvider):
    """
    Translation provider reached over HTTP

    Usage:
        provider = HttpTranslationProvider("http://localhost:8080/translate", target_lang="zh")
        text = await provider.translate("Page title", "Hello")
        await provider.close()
    """

    name = "http"

    def __init__(
        self,
        endpoint: str,
        target_lang: str,
        api_key: Optional[str] = None,
        timeout: float = 120.0,
        segment_mode: bool = False,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not endpoint:
            raise ConfigurationError("No provider endpoint configured")
        self.endpoint = endpoint
        self.target_lang = target_lang
        self.segment_mode = segment_mode

        self._headers = {"Content-Type": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def supports_segments(self) -> bool:
        return self.segment_mode

    async def _post(self, payload: dict) -> dict:
        payload["target_lang"] = self.target_lang
        try:
            response = await self._client.post(self.endpoint, json=payload, headers=self._headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Provider returned HTTP {e.response.status_code}")
            raise ProviderError(f"HTTP {e.response.status_code}: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Provider request failed: {type(e).__name__}: {e}")
            raise ProviderError(f"HTTP error: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Invalid JSON from provider: {e}") from e

    async def translate(self, context: str, text: str) -> str:
        data = await self._post({"context": context, "text": text})
        translation = data.get("translation")
        if not isinstance(translation, str):
            raise ProviderError("Provider response has no 'translation' string")
        return translation

    async def translate_segments(self, context: str, texts: List[str]) -> List[str]:
        data = await self._post({"context": context, "texts": texts})
        translations = data.get("translations")
        if not isinstance(translations, list):
            raise ProviderError("Provider response has no 'translations' list")
        return [str(item) for item in translations]

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
