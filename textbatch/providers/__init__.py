"""
Translation providers

- BaseTranslationProvider: abstract interface consumed by the batcher
- CallableProvider: wraps coroutine functions
- HttpTranslationProvider: JSON-over-HTTP transport (httpx)
"""

from .base import BaseTranslationProvider, CallableProvider
from .http_provider import HttpTranslationProvider

__all__ = [
    'BaseTranslationProvider',
    'CallableProvider',
    'HttpTranslationProvider',
]
