# locale_sync/session_token.py
from __future__ import annotations
import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

SESSION_ID_RE = re.compile(r'"FdrFJe":"(.*?)"')
BL_RE = re.compile(r'"cfb2h":"(.*?)"')
AT_RE = re.compile(r'"SNlM0e":"(.*?)"')

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
}


class TokenAcquisitionError(RuntimeError):
    pass


@dataclass(frozen=True)
class SessionToken:
    session_id: str     # FdrFJe, sent as f.sid
    bl: str             # cfb2h, the batchexecute build label
    at: str             # SNlM0e, anti-forgery token posted with the form
    acquired_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.acquired_at < ttl


def parse_landing_page(html: str, acquired_at: float) -> SessionToken:
    found = {}
    for name, pat in (("FdrFJe", SESSION_ID_RE), ("cfb2h", BL_RE), ("SNlM0e", AT_RE)):
        m = pat.search(html)
        if not m:
            raise TokenAcquisitionError(f"Landing page has no {name} marker")
        found[name] = m.group(1)
    return SessionToken(found["FdrFJe"], found["cfb2h"], found["SNlM0e"], acquired_at)


class SessionTokenManager:
    """Fetches the provider's session markers and caches them for `ttl` seconds."""

    def __init__(
        self,
        session: requests.Session,
        landing_url: str,
        ttl: float = 3600.0,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.time,
        logger: logging.Logger | None = None,
    ) -> None:
        self.session = session
        self.landing_url = landing_url
        self.ttl = ttl
        self.timeout = timeout
        self.clock = clock
        self.logger = logger or logging.getLogger("locale-sync")
        self._token: Optional[SessionToken] = None
        self._lock = threading.Lock()

    @property
    def cached(self) -> Optional[SessionToken]:
        return self._token

    def get_token(self) -> SessionToken:
        with self._lock:
            now = self.clock()
            if self._token is not None and self._token.is_fresh(now, self.ttl):
                return self._token
            self._token = None
            token = self._fetch(now)
            self._token = token
            return token

    def invalidate(self) -> None:
        with self._lock:
            self._token = None

    def _fetch(self, now: float) -> SessionToken:
        self.logger.debug(f"Fetching session token from {self.landing_url}")
        try:
            resp = self.session.get(self.landing_url, headers=DEFAULT_HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            raise TokenAcquisitionError(f"Landing page request failed: {e}") from e
        if resp.status_code != 200:
            raise TokenAcquisitionError(f"Landing page returned HTTP {resp.status_code}")
        return parse_landing_page(resp.text, now)
