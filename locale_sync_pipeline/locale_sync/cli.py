from __future__ import annotations
import argparse, sys
from typing import List, Optional

from .config import SyncConfig
from .logger import setup_logger
from .store import JsonDictionaryStore, SourceDictionaryError
from .sync import SyncOrchestrator, SyncReport
from .translator_google import GoogleWebTranslator


def build_config(args: argparse.Namespace) -> SyncConfig:
    cfg = SyncConfig()
    if args.config:
        cfg = SyncConfig.from_file(args.config, base=cfg)
    if args.dir:
        cfg.dict_dir = args.dir
    if args.locales:
        cfg.target_locales = list(args.locales)
    if args.log_level:
        cfg.log_level = args.log_level
    if args.dry_run:
        cfg.dry_run = True
    return cfg


def synchronize(cfg: SyncConfig) -> SyncReport:
    logger = setup_logger(cfg.log_level)
    store = JsonDictionaryStore(cfg.dict_dir)
    with GoogleWebTranslator.from_config(cfg, logger=logger) as translator:
        orchestrator = SyncOrchestrator(cfg, store, translator, logger=logger)
        report = orchestrator.run()
    logger.debug(f"Translated {report.translated} entries, {report.unchanged} left as source text")
    return report


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="locale-sync",
        description="Sync <locale>.json dictionaries with en_US.json and machine-translate missing entries",
    )
    ap.add_argument("--dir", default=None, help="Directory holding the <locale>.json files (default: $LOCALE_SYNC_DIR or .)")
    ap.add_argument("--config", default=None, help="YAML file with config overrides")
    ap.add_argument("--locales", nargs="+", default=None, help="Target locales (default: the built-in list)")
    ap.add_argument("--log-level", default=None)
    ap.add_argument("--dry-run", action="store_true", help="Reconcile and tag only; no provider calls")
    args = ap.parse_args(argv)

    try:
        cfg = build_config(args)
    except (OSError, ValueError) as e:
        setup_logger("INFO").error(f"Invalid configuration: {e}")
        return 1

    try:
        synchronize(cfg)
    except SourceDictionaryError as e:
        setup_logger(cfg.log_level).error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
