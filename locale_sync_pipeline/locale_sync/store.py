# locale_sync/store.py
from __future__ import annotations
import json
import os
from abc import ABC, abstractmethod
from typing import Dict

from .utils import sort_dictionary


class DictionaryFormatError(RuntimeError):
    def __init__(self, locale: str, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.locale = locale
        self.path = path
        self.reason = reason


class SourceDictionaryError(RuntimeError):
    pass


class DictionaryStore(ABC):
    @abstractmethod
    def exists(self, locale: str) -> bool:
        ...

    @abstractmethod
    def load(self, locale: str) -> Dict[str, str]:
        """Return the locale's mapping, or {} when nothing is persisted for it."""
        ...

    @abstractmethod
    def save(self, locale: str, data: Dict[str, str]) -> None:
        ...

    def load_source(self, locale: str) -> Dict[str, str]:
        if not self.exists(locale):
            raise SourceDictionaryError(f"Source dictionary for {locale} not found")
        try:
            return self.load(locale)
        except DictionaryFormatError as e:
            raise SourceDictionaryError(f"Source dictionary is unreadable: {e}") from e


class JsonDictionaryStore(DictionaryStore):
    """One `<locale>.json` file per locale inside `directory`."""

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def path_for(self, locale: str) -> str:
        return os.path.join(self.directory, f"{locale}.json")

    def exists(self, locale: str) -> bool:
        return os.path.isfile(self.path_for(locale))

    def load(self, locale: str) -> Dict[str, str]:
        path = self.path_for(locale)
        if not os.path.exists(path):
            return {}
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DictionaryFormatError(locale, path, str(e)) from e
        if not isinstance(data, dict):
            raise DictionaryFormatError(locale, path, f"expected a JSON object, got {type(data).__name__}")
        bad = [k for k, v in data.items() if not isinstance(v, str)]
        if bad:
            raise DictionaryFormatError(locale, path, f"non-string value for key(s): {', '.join(sorted(bad)[:5])}")
        return data

    def save(self, locale: str, data: Dict[str, str]) -> None:
        path = self.path_for(locale)
        os.makedirs(self.directory or ".", exist_ok=True)
        text = json.dumps(sort_dictionary(data), ensure_ascii=False, indent=2) + "\n"
        tmp = path + ".tmp"
        with open(tmp, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp, path)


class MemoryDictionaryStore(DictionaryStore):
    """Keeps dictionaries in process memory; nothing touches the disk."""

    def __init__(self, initial: Dict[str, Dict[str, str]] | None = None) -> None:
        self.data: Dict[str, Dict[str, str]] = {k: dict(v) for k, v in (initial or {}).items()}
        self.saves: list[str] = []

    def exists(self, locale: str) -> bool:
        return locale in self.data

    def load(self, locale: str) -> Dict[str, str]:
        return dict(self.data.get(locale, {}))

    def save(self, locale: str, data: Dict[str, str]) -> None:
        self.data[locale] = sort_dictionary(data)
        self.saves.append(locale)
