# locale_sync/sync.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .config import SyncConfig
from .reconciler import Reconciliation, clear_retranslate_marks, reconcile
from .store import DictionaryFormatError, DictionaryStore
from .tags import Provenance, tag
from .translator_base import TranslationResult, Translator
from .utils import sort_dictionary
from .work_queue import SingleWorkerQueue, TranslationJob, TranslationQueue


class LocaleState(Enum):
    PENDING = "pending"
    LOADED = "loaded"
    RECONCILED = "reconciled"
    TRANSLATING = "translating"
    PERSISTED = "persisted"


@dataclass
class LocaleReport:
    locale: str
    state: LocaleState = LocaleState.PENDING
    created: bool = False
    recovered_from_error: bool = False
    added: int = 0
    removed: int = 0
    translated: int = 0
    unchanged: int = 0


@dataclass
class SyncReport:
    source_locale: str
    locales: Dict[str, LocaleReport] = field(default_factory=dict)
    source_marks_cleared: int = 0

    @property
    def translated(self) -> int:
        return sum(r.translated for r in self.locales.values())

    @property
    def unchanged(self) -> int:
        return sum(r.unchanged for r in self.locales.values())


class SyncOrchestrator:
    """
    One synchronization pass: for every target locale
    load -> reconcile -> translate pending entries -> persist,
    then re-save the source sorted.
    """

    def __init__(
        self,
        cfg: SyncConfig,
        store: DictionaryStore,
        translator: Optional[Translator],
        logger: logging.Logger | None = None,
    ) -> None:
        self.cfg = cfg
        self.store = store
        self.translator = translator
        self.logger = logger or logging.getLogger("locale-sync")

    def run(self) -> SyncReport:
        # SourceDictionaryError propagates: nothing has been written yet
        source = sort_dictionary(self.store.load_source(self.cfg.source_locale))
        self.logger.info(f"Loaded {self.cfg.source_locale} with {len(source)} key(s)")

        report = SyncReport(self.cfg.source_locale)
        for locale in self.cfg.target_locales:
            if locale == self.cfg.source_locale:
                self.logger.warning(f"Skipping {locale}: it is the source locale")
                continue
            report.locales[locale] = self.sync_locale(locale, source)

        if self.cfg.clear_retranslate_marks:
            cleared = clear_retranslate_marks(source)
            report.source_marks_cleared = sum(1 for k in source if source[k] != cleared[k])
            source = cleared
            if report.source_marks_cleared:
                self.logger.info(f"Cleared {report.source_marks_cleared} (UTO) mark(s) in {self.cfg.source_locale}")
        self.store.save(self.cfg.source_locale, source)
        self.logger.info("Translation update complete.")
        return report

    def sync_locale(self, locale: str, source: Dict[str, str]) -> LocaleReport:
        rep = LocaleReport(locale)
        rep.created = not self.store.exists(locale)

        try:
            target = self.store.load(locale)
        except DictionaryFormatError as e:
            self.logger.warning(f"Could not read {locale} dictionary ({e}); starting from an empty one")
            target = {}
            rep.recovered_from_error = True
        rep.state = LocaleState.LOADED

        rec = reconcile(source, target)
        rep.added, rep.removed = len(rec.added), len(rec.removed)
        rep.state = LocaleState.RECONCILED
        self.logger.debug(
            f"[{locale}] +{rep.added} -{rep.removed} key(s), {len(rec.pending)} pending translation"
        )

        rep.state = LocaleState.TRANSLATING
        merged = self._translate_pending(locale, rec, rep)

        self.store.save(locale, merged)
        rep.state = LocaleState.PERSISTED
        if rep.created:
            self.logger.info(f"Created {locale}.json")
        else:
            self.logger.info(f"Updated {locale}.json")
        return rep

    def _translate_pending(self, locale: str, rec: Reconciliation, rep: LocaleReport) -> Dict[str, str]:
        merged = dict(rec.dictionary)
        if not rec.pending:
            return merged
        if self.cfg.dry_run or self.translator is None:
            self.logger.info(f"[{locale}] dry run: {len(rec.pending)} entries left for translation")
            return merged

        translator = self.translator

        def work(job: TranslationJob) -> TranslationResult:
            return translator.translate(job.entry.text, self.cfg.source_locale, job.locale)

        queue: TranslationQueue = SingleWorkerQueue(work)
        queue.extend(TranslationJob(locale, p) for p in rec.pending)
        for job, result in queue.drain():
            merged[job.entry.key] = tag(result.text, Provenance.MACHINE)
            if result.text == job.entry.text:
                rep.unchanged += 1
            else:
                rep.translated += 1
        return merged
