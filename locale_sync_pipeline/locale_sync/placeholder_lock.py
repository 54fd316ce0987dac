# locale_sync/placeholder_lock.py
from __future__ import annotations
import re
from typing import Dict, List, Tuple

DBL_CURLY_RE = re.compile(r"\{\{[^{}]+\}\}")        # {{count}}
CURLY_RE = re.compile(r"\{[^{}]*\}")                 # {name}, {0}, {}
PERCENT_FMT_RE = re.compile(r"%(?:\d+\$)?(?:\([^)]+\))?[sdif@]")  # %s, %1$s, %(name)s
ANGLE_RE = re.compile(r"</?[A-Za-z][^<>]*>")         # <b>, </a>, <br/>

DEFAULT_PATTERNS: List[re.Pattern] = [DBL_CURLY_RE, CURLY_RE, PERCENT_FMT_RE, ANGLE_RE]

PH_TOKEN_RE = re.compile(r"__PH\d+__")


def lock_placeholders(s: str, extra_patterns: List[re.Pattern] | None = None) -> Tuple[str, Dict[str, str]]:
    """
    Replace substrings matching any of the patterns with __PH{n}__ tokens.
    Returns (locked_text, mapping).
    """
    mapping: Dict[str, str] = {}
    idx = 0

    def _sub_fn(m):
        nonlocal idx
        key = f"__PH{idx}__"
        mapping[key] = m.group(0)
        idx += 1
        return key

    locked = s
    for pat in DEFAULT_PATTERNS if extra_patterns is None else extra_patterns:
        locked = pat.sub(_sub_fn, locked)
    return locked, mapping


def unlock_placeholders(s: str, mapping: Dict[str, str]) -> str:
    # Replace longer keys first to avoid partial collisions
    for k in sorted(mapping.keys(), key=lambda x: -len(x)):
        s = s.replace(k, mapping[k])
    return s


def placeholders_intact(locked_out: str, mapping: Dict[str, str]) -> bool:
    return sorted(PH_TOKEN_RE.findall(locked_out)) == sorted(mapping.keys())
