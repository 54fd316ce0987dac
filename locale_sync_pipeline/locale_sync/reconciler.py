# locale_sync/reconciler.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

from .tags import Provenance, decode_value
from .utils import sort_dictionary


@dataclass(frozen=True)
class PendingEntry:
    key: str
    text: str               # clean source text to send to the translator
    reason: Provenance      # SOURCE_COPY or RETRANSLATE


@dataclass
class Reconciliation:
    dictionary: Dict[str, str]
    pending: List[PendingEntry] = field(default_factory=list)
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)


def reconcile(source: Dict[str, str], target: Dict[str, str]) -> Reconciliation:
    """
    Align `target` with `source`:
      - keys only in target are dropped,
      - keys in both keep the target value,
      - keys only in source are inserted as the source's clean text tagged (EN).
    The merged dictionary is key-ascending. `pending` lists, in the same order, every
    entry tagged (EN) plus every entry whose source value is tagged (UTO), each with
    the source's clean text.
    Neither input is mutated.
    """
    merged: Dict[str, str] = {}
    added: List[str] = []
    for key, src_value in source.items():
        if key in target:
            merged[key] = target[key]
        else:
            merged[key] = decode_value(src_value).with_provenance(Provenance.SOURCE_COPY).encode()
            added.append(key)
    removed = sorted(k for k in target if k not in source)
    merged = sort_dictionary(merged)

    pending: List[PendingEntry] = []
    for key, value in merged.items():
        src_entry = decode_value(source[key])
        if src_entry.provenance is Provenance.RETRANSLATE:
            pending.append(PendingEntry(key, src_entry.text, Provenance.RETRANSLATE))
            continue
        if decode_value(value).provenance is Provenance.SOURCE_COPY:
            pending.append(PendingEntry(key, src_entry.text, Provenance.SOURCE_COPY))

    return Reconciliation(dictionary=merged, pending=pending, added=sorted(added), removed=removed)


def clear_retranslate_marks(source: Dict[str, str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, value in source.items():
        entry = decode_value(value)
        if entry.provenance is Provenance.RETRANSLATE:
            value = entry.with_provenance(Provenance.CONFIRMED).encode()
        out[key] = value
    return sort_dictionary(out)
