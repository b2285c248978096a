"""
Base Translation Provider - Abstract Interface

The batching pipeline treats the provider as an opaque asynchronous call
that may fail or hang; it never retries.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List, Optional


class BaseTranslationProvider(ABC):
    """
    Abstract base class for translation providers.

    Flat-string providers implement translate(). Providers that can take an
    ordered list of texts set supports_segments and implement
    translate_segments(), which removes the separator round-trip.
    """

    name: str = "base"

    @property
    def supports_segments(self) -> bool:
        """Whether translate_segments() is available"""
        return False

    @abstractmethod
    async def translate(self, context: str, text: str) -> str:
        """
        Translate text.

        Args:
            context: Document context (e.g. document title)
            text: Text to translate, possibly several fragments joined
                  with the batch separator

        Returns:
            Translated text; returning the input unchanged means no
            translation was necessary
        """
        pass

    async def translate_segments(self, context: str, texts: List[str]) -> List[str]:
        """Translate an ordered list of texts, one result per input"""
        raise NotImplementedError(f"{self.name} does not support segment lists")

    async def close(self) -> None:
        """Release transport resources"""
        return None


class CallableProvider(BaseTranslationProvider):
    """Adapts plain coroutine functions to the provider interface"""

    name = "callable"

    def __init__(
        self,
        translate_fn: Callable[[str, str], Awaitable[str]],
        segments_fn: Optional[Callable[[str, List[str]], Awaitable[List[str]]]] = None,
    ):
        self._translate_fn = translate_fn
        self._segments_fn = segments_fn

    @property
    def supports_segments(self) -> bool:
        return self._segments_fn is not None

    async def translate(self, context: str, text: str) -> str:
        return await self._translate_fn(context, text)

    async def translate_segments(self, context: str, texts: List[str]) -> List[str]:
        if self._segments_fn is None:
            return await super().translate_segments(context, texts)
        return await self._segments_fn(context, texts)
