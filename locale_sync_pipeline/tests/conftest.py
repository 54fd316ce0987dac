from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, List, Optional

import pytest

from locale_sync.config import provider_locale
from locale_sync.translator_base import TranslationResult, Translator

LANDING_HTML = (
    '<html><script>window.WIZ_global_data = {"FdrFJe":"-123456789","cfb2h":"boq_translate-webserver_20240101.00_p0",'
    '"SNlM0e":"AFxyz:1700000000000","qwAQke":"TranslateWebserverUi"};</script></html>'
)


def translation_inner(text: str, detected: Optional[str] = "en", translit: Optional[str] = None, spaced: bool = True) -> list:
    return [
        [None, None, detected],
        [[[None, translit, None, spaced, None, [[text, None, None, None, [[text, [5]]]]]]], "fr", 1, "en", ["Hello", "en", "fr", True]],
    ]


def is_sorted(keys: Iterable[str]) -> bool:
    keys = list(keys)
    return all(a < b for a, b in zip(keys, keys[1:]))


def batchexecute_body(inner: Any, rpc_id: str = "MkEWBc") -> str:
    payload = inner if isinstance(inner, str) else json.dumps(inner)
    frame = json.dumps([["wrb.fr", rpc_id, payload, None, None, None, "generic"], ["di", 42], ["af.httprm", 41, "-1", 7]])
    tail = json.dumps([["e", 4, None, None, len(frame)]])
    return f")]}}'\n\n{len(frame)}\n{frame}\n{len(tail)}\n{tail}\n"


def rpc_args(data: Dict[str, str]) -> list:
    """Unwrap the [[text, src, tgt, true], [null]] list from a posted f.req."""
    envelope = json.loads(data["f.req"])
    return json.loads(envelope[0][0][1])


class StubResponse:
    def __init__(self, status_code: int = 200, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


class StubSession:
    def __init__(
        self,
        landing: Any = LANDING_HTML,
        on_post: Optional[Callable[[str, Dict[str, Any], Dict[str, str]], Any]] = None,
    ) -> None:
        self.landing = landing
        self.on_post = on_post
        self.gets: List[Dict[str, Any]] = []
        self.posts: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> StubResponse:
        self.gets.append({"url": url, **kwargs})
        landing = self.landing
        if isinstance(landing, Exception):
            raise landing
        if isinstance(landing, StubResponse):
            return landing
        return StubResponse(200, landing)

    def post(self, url: str, params: Dict[str, Any] | None = None, data: Dict[str, str] | None = None, **kwargs: Any) -> StubResponse:
        self.posts.append({"url": url, "params": params or {}, "data": data or {}, **kwargs})
        if self.on_post is None:
            return StubResponse(500, "no handler")
        out = self.on_post(url, params or {}, data or {})
        if isinstance(out, Exception):
            raise out
        if isinstance(out, StubResponse):
            return out
        return StubResponse(200, out)

    def close(self) -> None:
        self.closed = True


def echo_translation(prefix: str) -> Callable[[str, Dict[str, Any], Dict[str, str]], str]:
    """Provider stub answering every request with '<prefix>:<tgt>:<text>'."""

    def handler(url: str, params: Dict[str, Any], data: Dict[str, str]) -> str:
        text, _src, tgt, _ = rpc_args(data)[0]
        return batchexecute_body(translation_inner(f"{prefix}:{tgt}:{text}"))

    return handler


class FakeTranslator(Translator):
    def __init__(self, fn: Callable[[str, str], Optional[str]] | None = None) -> None:
        self.fn = fn or (lambda text, target: f"<{target}>{text}")
        self.calls: List[tuple] = []

    def translate(self, text: str, source_locale: str, target_locale: str) -> TranslationResult:
        self.calls.append((text, source_locale, target_locale))
        out = self.fn(text, target_locale)
        if out is None:
            return TranslationResult(text, provider_locale(source_locale), "")
        return TranslationResult(out, provider_locale(source_locale), "")


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
