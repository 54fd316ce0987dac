# locale_sync/translator_google.py
from __future__ import annotations
import json, logging, random, time
from typing import Callable, List, Optional

import requests

from .config import GOOGLE_LANDING_URL, GOOGLE_RPC_URL, SyncConfig, provider_locale
from .placeholder_lock import lock_placeholders, placeholders_intact, unlock_placeholders
from .response_decoder import RPC_ID, DecodedTranslation, decode_translation
from .session_token import DEFAULT_HEADERS, SessionToken, SessionTokenManager, TokenAcquisitionError
from .translator_base import TranslationResult, Translator
from .utils import shorten

FORM_HEADERS = {
    **DEFAULT_HEADERS,
    "Content-Type": "application/x-www-form-urlencoded;charset=UTF-8",
}

# 400/401/403 usually mean the session markers were rejected
STALE_TOKEN_STATUSES = {400, 401, 403}


class ProviderResponseError(RuntimeError):
    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"HTTP {status_code}: {body[:200]}")
        self.status_code = status_code

    @property
    def stale_token(self) -> bool:
        return self.status_code in STALE_TOKEN_STATUSES

    @property
    def retryable(self) -> bool:
        return self.stale_token or self.status_code == 429 or self.status_code >= 500


def build_rpc_request(text: str, source: str, target: str) -> str:
    """The f.req form value for one MkEWBc call."""
    inner = json.dumps([[text, source, target, True], [None]], ensure_ascii=False, separators=(",", ":"))
    return json.dumps([[[RPC_ID, inner, None, "generic"]]], ensure_ascii=False, separators=(",", ":"))


class GoogleWebTranslator(Translator):
    """
    Client for the translate.google.com web UI's batchexecute endpoint.

    One request at a time, spaced by `qps`. Transport errors, 429 and 5xx are retried
    with exponential backoff; anything still failing after that (or an undecodable
    response) degrades to returning the input text untranslated.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        landing_url: str = GOOGLE_LANDING_URL,
        rpc_url: str = GOOGLE_RPC_URL,
        ui_language: str = "en-US",
        token_ttl: float = 3600.0,
        timeout: float = 30.0,
        qps: float = 2.0,
        max_retries: int = 3,
        backoff_base: float = 1.5,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
        lock_patterns: Optional[List] = None,
    ):
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.rpc_url = rpc_url
        self.ui_language = ui_language
        self.timeout = timeout
        self.qps = qps
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.logger = logger or logging.getLogger("locale-sync")
        self.clock = clock
        self.sleep = sleep
        self.lock_patterns = lock_patterns
        self.tokens = SessionTokenManager(
            self.session, landing_url, ttl=token_ttl, timeout=timeout, clock=clock, logger=self.logger,
        )
        self._last_call = 0.0
        self._reqid = random.randint(1000, 9999)

    @classmethod
    def from_config(cls, cfg: SyncConfig, session: requests.Session | None = None, logger: logging.Logger | None = None) -> "GoogleWebTranslator":
        return cls(
            session=session,
            landing_url=cfg.landing_url,
            rpc_url=cfg.rpc_url,
            ui_language=cfg.ui_language,
            token_ttl=cfg.token_ttl,
            timeout=cfg.request_timeout,
            qps=cfg.qps,
            max_retries=cfg.max_retries,
            backoff_base=cfg.backoff_base,
            logger=logger,
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def translate(self, text: str, source_locale: str, target_locale: str) -> TranslationResult:
        src = provider_locale(source_locale)
        tgt = provider_locale(target_locale)
        fallback = TranslationResult(text, src, "")
        if not text.strip():
            return fallback

        locked, mapping = lock_placeholders(text, self.lock_patterns)

        try:
            decoded = self._request_with_retries(locked, src, tgt)
        except TokenAcquisitionError as e:
            self.logger.warning(f"[{target_locale}] no session token ({e}); keeping '{shorten(text)}' untranslated")
            return fallback
        except (requests.RequestException, ProviderResponseError) as e:
            self.logger.warning(f"[{target_locale}] translation request failed ({e}); keeping '{shorten(text)}' untranslated")
            return fallback

        if decoded is None:
            self.logger.warning(f"[{target_locale}] undecodable provider response; keeping '{shorten(text)}' untranslated")
            return fallback
        if not decoded.text.strip():
            self.logger.warning(f"[{target_locale}] empty translation for '{shorten(text)}'; keeping source text")
            return fallback
        if mapping and not placeholders_intact(decoded.text, mapping):
            self.logger.warning(f"[{target_locale}] provider altered placeholders in '{shorten(text)}'; keeping source text")
            return fallback

        return TranslationResult(
            unlock_placeholders(decoded.text, mapping),
            decoded.detected_lang or src,
            decoded.transliteration,
        )

    def _respect_qps(self):
        min_interval = 1.0 / max(self.qps, 0.01)
        dt = self.clock() - self._last_call
        if dt < min_interval:
            self.sleep(min_interval - dt)
        self._last_call = self.clock()

    def _next_reqid(self) -> int:
        self._reqid += 100000
        return self._reqid

    def _request_with_retries(self, text: str, src: str, tgt: str) -> Optional[DecodedTranslation]:
        attempts = max(self.max_retries, 1)
        last_err: Exception | None = None
        for attempt in range(attempts):
            self._respect_qps()
            try:
                token = self.tokens.get_token()
                return self._post(token, text, src, tgt)
            except ProviderResponseError as e:
                last_err = e
                if e.stale_token:
                    self.tokens.invalidate()
                if not e.retryable:
                    break
            except (requests.RequestException, TokenAcquisitionError) as e:
                last_err = e
            if attempt + 1 < attempts:
                delay = (self.backoff_base ** attempt) + random.uniform(0, 0.6)
                self.logger.warning(f"Provider request failed ({last_err}); retrying in {delay:.1f}s")
                self.sleep(delay)
        assert last_err is not None
        raise last_err

    def _post(self, token: SessionToken, text: str, src: str, tgt: str) -> Optional[DecodedTranslation]:
        params = {
            "rpcids": RPC_ID,
            "source-path": "/",
            "f.sid": token.session_id,
            "bl": token.bl,
            "hl": self.ui_language,
            "soc-app": 1,
            "soc-platform": 1,
            "soc-device": 1,
            "_reqid": self._next_reqid(),
            "rt": "c",
        }
        data = {"f.req": build_rpc_request(text, src, tgt), "at": token.at}
        resp = self.session.post(self.rpc_url, params=params, data=data, headers=FORM_HEADERS, timeout=self.timeout)
        if resp.status_code != 200:
            raise ProviderResponseError(resp.status_code, resp.text or "")
        return decode_translation(resp.text)
