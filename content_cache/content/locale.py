"""
Supported content locales.

Every flashcard carries an English term/definition plus optional
translations. The model attribute holding each translation is looked up in
an explicit table rather than derived from the locale name, so adding a
locale means adding one enum member and one table row.
"""

from dataclasses import dataclass
from enum import Enum


class Locale(str, Enum):
    ENGLISH = "english"
    FRENCH = "french"
    CHINESE = "chinese"
    SPANISH = "spanish"
    TAGALOG = "tagalog"
    PUNJABI = "punjabi"
    KOREAN = "korean"


@dataclass(frozen=True, slots=True)
class LocaleFields:
    """Flashcard attribute names for one locale."""

    term: str
    definition: str


LOCALE_FIELDS: dict[Locale, LocaleFields] = {
    Locale.ENGLISH: LocaleFields("term_english", "definition_english"),
    Locale.FRENCH: LocaleFields("term_french", "definition_french"),
    Locale.CHINESE: LocaleFields("term_chinese", "definition_chinese"),
    Locale.SPANISH: LocaleFields("term_spanish", "definition_spanish"),
    Locale.TAGALOG: LocaleFields("term_tagalog", "definition_tagalog"),
    Locale.PUNJABI: LocaleFields("term_punjabi", "definition_punjabi"),
    Locale.KOREAN: LocaleFields("term_korean", "definition_korean"),
}


def fields_for(locale: Locale) -> LocaleFields:
    return LOCALE_FIELDS[locale]
