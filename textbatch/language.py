#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Language Detection - decides whether a fragment already reads in the target language
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass
class LanguageInfo:
    """Language characteristics used for detection"""
    code: str
    name: str
    char_range: str


# Order matters on ties: broader scripts first, so plain ASCII text is "en"
# and pure Han text is "zh" rather than "ja".
LANGUAGES: Dict[str, LanguageInfo] = {
    "en": LanguageInfo("en", "English", "a-zA-Z"),
    "zh": LanguageInfo("zh", "Chinese", "\u4e00-\u9fff"),
    "ja": LanguageInfo("ja", "Japanese", "\u3040-\u309f\u30a0-\u30ff\u4e00-\u9fff"),
    "ko": LanguageInfo("ko", "Korean", "\uac00-\ud7af"),
    "vi": LanguageInfo(
        "vi", "Vietnamese",
        "a-zA-ZàáảãạăằắẳẵặâầấẩẫậèéẻẽẹêềếểễệìíỉĩịòóỏõọôồốổỗộơờớởỡợùúủũụưừứửữựỳýỷỹỵđĐ"
    ),
    "fr": LanguageInfo("fr", "French", "a-zA-ZàâäæçéèêëïîôùûüÿœÀÂÄÆÇÉÈÊËÏÎÔÙÛÜŸŒ"),
    "es": LanguageInfo("es", "Spanish", "a-zA-ZáéíóúüñÁÉÍÓÚÜÑ"),
    "de": LanguageInfo("de", "German", "a-zA-ZäöüßÄÖÜ"),
    "ru": LanguageInfo("ru", "Russian", "\u0400-\u04ff"),
}

_PATTERNS = {code: re.compile(f"[{info.char_range}]") for code, info in LANGUAGES.items()}
_WHITESPACE_RE = re.compile(r"[\s\u3000]")


def normalize_language_code(code: str) -> str:
    """'zh-Hans' -> 'zh', 'EN_us' -> 'en'"""
    return re.split(r"[-_]", code.strip())[0].lower() if code else ""


class LanguageDetector:
    """Rule-based language detection by script coverage"""

    def __init__(self, min_confidence: float = 0.5, candidates: Optional[List[str]] = None):
        self.min_confidence = min_confidence
        self.candidates = candidates

    def detect_with_confidence(self, text: str) -> Tuple[str, float]:
        """
        Detect language from text

        Returns:
            Tuple of (language_code, confidence); ("unknown", 0.0) when no
            candidate script covers enough of the text
        """
        text = _WHITESPACE_RE.sub("", text or "")
        text_chars = [c for c in text if not c.isdigit()]
        if not text_chars:
            return "unknown", 0.0

        scores = {}
        for lang_code in self.candidates or list(LANGUAGES):
            pattern = _PATTERNS.get(lang_code)
            if pattern is None:
                continue
            scores[lang_code] = len(pattern.findall(text)) / len(text_chars)

        if not scores:
            return "unknown", 0.0

        best_lang, best_score = max(scores.items(), key=lambda x: x[1])
        if best_score < self.min_confidence:
            return "unknown", best_score
        return best_lang, best_score

    def detect(self, text: str) -> str:
        return self.detect_with_confidence(text)[0]

    def is_language(self, text: str, lang_code: str) -> bool:
        """Check if text is in the given language"""
        return self.detect(text) == normalize_language_code(lang_code)


def get_language_name(code: str) -> str:
    info = LANGUAGES.get(normalize_language_code(code))
    return info.name if info else code


def get_supported_languages() -> List[str]:
    return list(LANGUAGES.keys())
