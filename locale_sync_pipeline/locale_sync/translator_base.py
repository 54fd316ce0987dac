from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TranslationResult:
    text: str
    detected_lang: str       # provider language code ("en", "hi"), never a full locale
    transliteration: str = ""


class Translator(ABC):
    @abstractmethod
    def translate(self, text: str, source_locale: str, target_locale: str) -> TranslationResult:
        """Never raises; on failure returns the input text with the source language code as detected_lang."""
        ...

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False
