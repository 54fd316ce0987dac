# locale_sync/response_decoder.py
"""
Decoder for the batchexecute response of the MkEWBc (translate) remote call.

The body looks like:

    )]}'

    1234
    [["wrb.fr","MkEWBc","<inner json string>",null,null,null,"generic"],["di",42],...]
    25
    [["e",4,null,null,1234]]

The inner JSON string decodes to nested arrays; the pieces we need live at:
    inner[0][2]          detected source language (may be null)
    inner[1][3]          source language as requested; "auto" defers to inner[2]
    inner[1][0][0][1]    transliteration of the source text
    inner[1][0][0][3]    true when sentences are joined with a space (false for ja, zh, th)
    inner[1][0][0][5]    list of sentences, each [translated_text, ...]
    inner[1][0][0][0]    whole translated text (older layout)

Each step returns None when the expected shape is absent; nothing here raises.
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any, List, Optional

RPC_ID = "MkEWBc"
XSSI_PREFIX = ")]}'"


@dataclass(frozen=True)
class DecodedTranslation:
    text: str
    detected_lang: Optional[str]
    transliteration: str


def _at(node: Any, *path: int) -> Any:
    for idx in path:
        if not isinstance(node, list) or idx >= len(node) or idx < -len(node):
            return None
        node = node[idx]
    return node


def _loads(s: Any) -> Any:
    if not isinstance(s, str):
        return None
    try:
        return json.loads(s)
    except ValueError:
        return None


def split_frames(body: str) -> List[Any]:
    """Parse every JSON line of a chunked (rt=c) or plain batchexecute body."""
    if not isinstance(body, str):
        return []
    text = body.strip()
    if text.startswith(XSSI_PREFIX):
        text = text[len(XSSI_PREFIX):]
    frames: List[Any] = []
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith("["):
            continue
        parsed = _loads(line)
        if isinstance(parsed, list):
            frames.append(parsed)
    if not frames:
        parsed = _loads(text.strip())
        if isinstance(parsed, list):
            frames.append(parsed)
    return frames


def find_rpc_payload(frames: List[Any], rpc_id: str = RPC_ID) -> Optional[str]:
    for frame in frames:
        for envelope in frame:
            if _at(envelope, 0) == "wrb.fr" and _at(envelope, 1) == rpc_id:
                payload = _at(envelope, 2)
                if isinstance(payload, str):
                    return payload
    return None


def _sentences_text(sentences: Any, spaced: bool) -> Optional[str]:
    if not isinstance(sentences, list) or not sentences:
        return None
    parts: List[str] = []
    for sentence in sentences:
        piece = _at(sentence, 0)
        if isinstance(piece, str) and piece:
            parts.append(piece)
    if not parts:
        return None
    return (" " if spaced else "").join(parts)


def extract_translation(inner: Any) -> Optional[DecodedTranslation]:
    if not isinstance(inner, list):
        return None
    candidate = _at(inner, 1, 0, 0)
    if not isinstance(candidate, list):
        return None

    text = _sentences_text(_at(candidate, 5), bool(_at(candidate, 3)))
    if text is None:
        whole = _at(candidate, 0)
        text = whole if isinstance(whole, str) else None
    if text is None:
        return None

    detected = _at(inner, 0, 2)
    if not isinstance(detected, str) or not detected:
        detected = _at(inner, 1, 3)
        if detected == "auto":
            detected = _at(inner, 2)
    if not isinstance(detected, str) or not detected:
        detected = None

    translit = _at(candidate, 1)
    if not isinstance(translit, str):
        translit = ""
    return DecodedTranslation(text, detected, translit)


def decode_translation(body: str, rpc_id: str = RPC_ID) -> Optional[DecodedTranslation]:
    frames = split_frames(body)
    if not frames:
        return None
    payload = find_rpc_payload(frames, rpc_id)
    if payload is None:
        return None
    return extract_translation(_loads(payload))
