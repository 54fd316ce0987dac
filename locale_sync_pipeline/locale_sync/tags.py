# locale_sync/tags.py
"""
Provenance tags carried by dictionary values.

On disk a tag is a literal suffix of the value ("Hello(EN)"). In memory a value is
an Entry holding the clean text and a Provenance, so the rest of the code never
does substring checks on raw values.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Provenance(Enum):
    CONFIRMED = ""          # human-confirmed translation, no tag
    SOURCE_COPY = "(EN)"    # copied from the source, not yet translated
    RETRANSLATE = "(UTO)"   # source entry flagged for re-translation everywhere
    MACHINE = "(EAN)"       # provisional machine translation

    @property
    def suffix(self) -> str:
        return self.value


_TAGGED = [p for p in Provenance if p.suffix]


@dataclass(frozen=True)
class Entry:
    text: str
    provenance: Provenance = Provenance.CONFIRMED

    def encode(self) -> str:
        return self.text + self.provenance.suffix

    def with_provenance(self, provenance: Provenance) -> "Entry":
        return Entry(self.text, provenance)


def decode_value(value: str) -> Entry:
    for p in _TAGGED:
        if value.endswith(p.suffix):
            return Entry(value[: -len(p.suffix)], p)
    return Entry(value, Provenance.CONFIRMED)


def strip_tag(value: str) -> str:
    return decode_value(value).text


def provenance_of(value: str) -> Provenance:
    return decode_value(value).provenance


def tag(text: str, provenance: Provenance) -> str:
    return Entry(text, provenance).encode()


def decode_dictionary(data: Dict[str, str]) -> Dict[str, Entry]:
    return {k: decode_value(v) for k, v in data.items()}


def encode_dictionary(entries: Dict[str, Entry]) -> Dict[str, str]:
    return {k: e.encode() for k, e in entries.items()}
