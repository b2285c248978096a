"""
Fragment renderers

The renderer writes translated text back to wherever a fragment came from.
The pipeline only calls apply(); the display mode is the renderer's business.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable

from config.constants import DISPLAY_MODE_BILINGUAL, DISPLAY_MODE_REPLACE
from .batching.models import TextFragment


class FragmentRenderer(ABC):
    """Applies translated text to a fragment's origin"""

    @abstractmethod
    def apply(self, fragment: TextFragment, translated_text: str) -> None:
        pass


class BufferRenderer(FragmentRenderer):
    """
    Keeps rendered output in memory, keyed by fragment origin.

    Display modes:
        0 (replace): the translation replaces the source text
        1 (bilingual): the translation is appended below the source text
    """

    def __init__(self, settings: Any = None, display_mode: int = None):
        self.settings = settings
        self._display_mode = display_mode
        self.output: Dict[Hashable, str] = {}

    @property
    def display_mode(self) -> int:
        if self._display_mode is not None:
            return self._display_mode
        if self.settings is not None:
            return self.settings.display_mode
        return DISPLAY_MODE_REPLACE

    def apply(self, fragment: TextFragment, translated_text: str) -> None:
        if self.display_mode == DISPLAY_MODE_BILINGUAL:
            self.output[fragment.origin] = f"{fragment.text}\n{translated_text}"
        else:
            self.output[fragment.origin] = translated_text

    def render(self, origin: Hashable, default: str = "") -> str:
        return self.output.get(origin, default)
