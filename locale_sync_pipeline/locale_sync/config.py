# locale_sync/config.py
from __future__ import annotations
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

SOURCE_LOCALE = "en_US"

DEFAULT_TARGET_LOCALES: List[str] = [
    "id_ID", "zh_CN", "es_ES", "fr_FR", "ja_JP", "ko_KR", "ru_RU",
    "th_TH", "vi_VN", "in_HI", "pl_PL", "nl_NL", "pt_BR",
]

# Locale codes the provider does not accept as-is. Applied to requests only,
# never to file names or dictionary content.
PROVIDER_LOCALE_OVERRIDES: Dict[str, str] = {
    "in_HI": "hi",
}

GOOGLE_LANDING_URL = "https://translate.google.com/"
GOOGLE_RPC_URL = "https://translate.google.com/_/TranslateWebserverUi/data/batchexecute"


def provider_locale(locale: str) -> str:
    if locale in PROVIDER_LOCALE_OVERRIDES:
        return PROVIDER_LOCALE_OVERRIDES[locale]
    return locale.split("_", 1)[0].lower()


@dataclass
class SyncConfig:
    dict_dir: str = field(default_factory=lambda: os.getenv("LOCALE_SYNC_DIR", "."))
    source_locale: str = SOURCE_LOCALE
    target_locales: List[str] = field(default_factory=lambda: list(DEFAULT_TARGET_LOCALES))

    landing_url: str = GOOGLE_LANDING_URL
    rpc_url: str = GOOGLE_RPC_URL
    ui_language: str = "en-US"
    token_ttl: float = 3600.0
    request_timeout: float = 30.0
    qps: float = 2.0
    max_retries: int = 3
    backoff_base: float = 1.5

    log_level: str = field(default_factory=lambda: os.getenv("LOCALE_SYNC_LOG_LEVEL", "INFO"))
    dry_run: bool = False
    # False keeps "(UTO)" in the source as a standing "always retranslate" marker.
    clear_retranslate_marks: bool = False

    @classmethod
    def from_mapping(cls, data: Dict[str, Any], base: Optional["SyncConfig"] = None) -> "SyncConfig":
        cfg = base or cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config option(s): {', '.join(unknown)}")
        for k, v in data.items():
            if k == "target_locales":
                if isinstance(v, str):
                    v = [v]
                v = [str(x) for x in v]
            setattr(cfg, k, v)
        return cfg

    @classmethod
    def from_file(cls, path: str, base: Optional["SyncConfig"] = None) -> "SyncConfig":
        import yaml
        with open(path, "r", encoding="utf-8") as fh:
            try:
                data = yaml.safe_load(fh) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Config file {path} is not valid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return cls.from_mapping(data, base=base)
