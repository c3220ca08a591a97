"""Localized strings for card chrome."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en"

LANG_CARD_LOCALES: dict[str, dict[str, str]] = {
    "langcard.title": {
        "ar": "أكثر اللغات إستخداماً",
        "cn": "最常用的语言",
        "cs": "Nejpoužívanější jazyky",
        "de": "Meist verwendete Sprachen",
        "en": "Most Used Languages",
        "es": "Lenguajes más usados",
        "fr": "Langages les plus utilisés",
        "hu": "Leggyakrabban használt nyelvek",
        "it": "Linguaggi più utilizzati",
        "ja": "最もよく使っている言語",
        "kr": "가장 많이 사용된 언어",
        "nl": "Meest gebruikte talen",
        "pt-pt": "Idiomas mais usados",
        "pt-br": "Linguagens mais usadas",
        "np": "अधिक प्रयोग गरिएको भाषाहरू",
        "el": "Οι περισσότερο χρησιμοποιούμενες γλώσσες",
        "ru": "Наиболее часто используемые языки",
        "uk-ua": "Найбільш часто використовувані мови",
        "id": "Bahasa Yang Paling Banyak Digunakan",
        "ml": "കൂടുതൽ ഉപയോഗിച്ച ഭാഷകൾ",
        "my": "Bahasa Paling Digunakan",
        "sk": "Najviac používané jazyky",
        "tr": "En Çok Kullanılan Diller",
        "pl": "Najczęściej używane języki",
    },
}


class TranslationError(KeyError):
    pass


class I18n:
    def __init__(self, locale: str | None, translations: dict[str, dict[str, str]]):
        self.locale = (locale or FALLBACK_LOCALE).lower()
        self.translations = translations

    def t(self, key: str) -> str:
        if key not in self.translations:
            raise TranslationError(f"{key} translation string not found")
        strings = self.translations[key]
        if self.locale not in strings:
            logger.debug("No %s translation for %s, using %s", self.locale, key, FALLBACK_LOCALE)
            return strings[FALLBACK_LOCALE]
        return strings[self.locale]
