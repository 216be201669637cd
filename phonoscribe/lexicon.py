import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from .errors import UnknownLanguageError
from .utils import logger


class Language(str, Enum):
    EN_UK = "en_uk"
    EN_US = "en_us"
    DE = "de"
    FR = "fr"
    ES = "es"

    def __str__(self):
        return self.value


LanguageCode = Union[Language, str]


def language_code(language: LanguageCode) -> str:
    return language.value if isinstance(language, Language) else str(language)


@dataclass
class DictionaryFolder:
    """A folder holding one ``<language>.json`` word -> phonemes file per language"""
    root_path: Path

    def path_for(self, language: LanguageCode) -> Path:
        return self.root_path / f"{language_code(language)}.json"

    @property
    def languages(self) -> list[str]:
        return sorted(p.stem for p in self.root_path.glob("*.json"))

    def load(self, language: LanguageCode) -> dict[str, str]:
        with open(self.path_for(language), "r", encoding="utf-8") as f:
            return json.load(f)

    def __iter__(self) -> Iterable[tuple[str, dict[str, str]]]:
        for language in self.languages:
            yield language, self.load(language)


class DictionaryStore:
    """Read-only per-language word -> phoneme string mapping.

    Words are stored lowercased, and lookups are exact matches on the lowercased word.
    Asking for a language that was never loaded raises ``UnknownLanguageError``
    instead of silently missing.
    """

    def __init__(self, dictionaries: Mapping[LanguageCode, Mapping[str, str]]):
        self._dictionaries: Mapping[str, Mapping[str, str]] = MappingProxyType({
            language_code(lang): MappingProxyType({word.lower(): phonemes
                                                   for word, phonemes in words.items()})
            for lang, words in dictionaries.items()
        })

    @classmethod
    def from_folder(cls, root_path: Path,
                    languages: Optional[Iterable[LanguageCode]] = None) -> "DictionaryStore":
        folder = DictionaryFolder(root_path=Path(root_path))
        if languages is None:
            dictionaries = dict(folder)
        else:
            dictionaries = {language_code(lang): folder.load(lang) for lang in languages}
        for lang, words in dictionaries.items():
            logger.info(f"Loaded {len(words)} entries for '{lang}' dictionary")
        return cls(dictionaries)

    @property
    def languages(self) -> list[str]:
        return list(self._dictionaries)

    def __contains__(self, language: LanguageCode) -> bool:
        return language_code(language) in self._dictionaries

    def __getitem__(self, language: LanguageCode) -> Mapping[str, str]:
        try:
            return self._dictionaries[language_code(language)]
        except KeyError:
            raise UnknownLanguageError(language_code(language), self.languages) from None

    def check_language(self, language: LanguageCode) -> str:
        code = language_code(language)
        if code not in self._dictionaries:
            raise UnknownLanguageError(code, self.languages)
        return code

    def lookup(self, language: LanguageCode, word: str) -> Optional[str]:
        return self[language].get(word.lower())
