# centerdesk/core/i18n.py
from typing import Callable, Dict, Optional
from functools import lru_cache
import json
from pathlib import Path

from centerdesk.core.config import settings


class I18nProvider:
    """Provides Arabic/English internationalization support"""

    def __init__(self, default_language: str = 'en'):
        self.translations: Dict[str, Dict[str, str]] = {}
        self.supported_languages = {'en', 'ar'}
        self.default_language = default_language if default_language in self.supported_languages else 'en'
        self._load_translations()

    def _load_translations(self) -> None:
        """Load Arabic and English translations from the translations directory"""
        translations_dir = Path(__file__).parent / 'translations'
        if not translations_dir.exists():
            raise FileNotFoundError(f"Translations directory not found: {translations_dir}")

        for lang in self.supported_languages:
            file_path = translations_dir / f'{lang}.json'
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    self.translations[lang] = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in translation file {file_path}: {str(e)}")

    def get_translation(self, language: Optional[str] = None) -> Callable[..., str]:
        """Get translation function for Arabic or English"""
        if language not in self.supported_languages:
            language = self.default_language

        translations = self.translations.get(language, self.translations[self.default_language])

        def translate(key: str, **kwargs) -> str:
            # Fall back to the default language, then to the key itself
            translation = translations.get(key)

            if translation is None:
                translation = self.translations[self.default_language].get(key, key)

            if kwargs:
                try:
                    return translation.format(**kwargs)
                except KeyError:
                    return translation

            return translation

        return translate

# Singleton instance
i18n_provider = I18nProvider(settings.DEFAULT_LANGUAGE)

@lru_cache(maxsize=128)
def get_translation(language: Optional[str] = None) -> Callable[..., str]:
    """Get cached translation function for Arabic or English"""
    return i18n_provider.get_translation(language)

def resolve_language(accept_language: Optional[str]) -> str:
    """Pick a supported language from an Accept-Language header value"""
    if not accept_language:
        return i18n_provider.default_language
    for part in accept_language.split(","):
        code = part.split(";")[0].strip().lower()[:2]
        if code in i18n_provider.supported_languages:
            return code
    return i18n_provider.default_language
