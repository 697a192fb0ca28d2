"""
Content domain: locales, models and response envelopes.

ContentService lives in content_cache.content.service.
"""

from .locale import LOCALE_FIELDS, Locale, LocaleFields, fields_for
from .models import Flashcard, FlashcardIndexEntry, Industry, Level
from .responses import error_response, success_response

__all__ = [
    "LOCALE_FIELDS",
    "Locale",
    "LocaleFields",
    "fields_for",
    "Flashcard",
    "FlashcardIndexEntry",
    "Industry",
    "Level",
    "error_response",
    "success_response",
]
