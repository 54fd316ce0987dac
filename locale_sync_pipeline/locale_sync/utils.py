import re
from typing import Dict

def sort_dictionary(d: Dict[str, str]) -> Dict[str, str]:
    return {k: d[k] for k in sorted(d)}

WHITESPACE_RE = re.compile(r"\s+")

def normalize_space(s: str) -> str:
    return WHITESPACE_RE.sub(" ", s).strip()

def shorten(s: str, limit: int = 60) -> str:
    s = normalize_space(s)
    return s if len(s) <= limit else s[: limit - 3] + "..."
