from __future__ import annotations

import pytest

from locale_sync.config import DEFAULT_TARGET_LOCALES, SyncConfig, provider_locale


@pytest.mark.parametrize(
    ("locale", "expected"),
    [("in_HI", "hi"), ("fr_FR", "fr"), ("zh_CN", "zh"), ("pt_BR", "pt"), ("en_US", "en")],
)
def test_provider_locale(locale: str, expected: str) -> None:
    assert provider_locale(locale) == expected


def test_defaults() -> None:
    cfg = SyncConfig()
    assert cfg.source_locale == "en_US"
    assert cfg.target_locales == DEFAULT_TARGET_LOCALES
    assert cfg.target_locales is not DEFAULT_TARGET_LOCALES
    assert cfg.token_ttl == 3600.0
    assert cfg.clear_retranslate_marks is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOCALE_SYNC_DIR", "/data/i18n")
    monkeypatch.setenv("LOCALE_SYNC_LOG_LEVEL", "DEBUG")
    cfg = SyncConfig()
    assert cfg.dict_dir == "/data/i18n"
    assert cfg.log_level == "DEBUG"


def test_from_file(tmp_path) -> None:
    path = tmp_path / "sync.yaml"
    path.write_text("target_locales: fr_FR\nqps: 0.5\nclear_retranslate_marks: true\n", encoding="utf-8")
    cfg = SyncConfig.from_file(str(path))
    assert cfg.target_locales == ["fr_FR"]
    assert cfg.qps == 0.5
    assert cfg.clear_retranslate_marks is True


def test_from_file_rejects_unknown_keys_and_non_mappings(tmp_path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("qpss: 3\n", encoding="utf-8")
    with pytest.raises(ValueError):
        SyncConfig.from_file(str(bad))
    bad.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        SyncConfig.from_file(str(bad))
    bad.write_text("qps: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError):
        SyncConfig.from_file(str(bad))
