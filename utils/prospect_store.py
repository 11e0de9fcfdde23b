"""
utils/prospect_store.py
────────────────────────────────────────────
Zentraler Zustandscontainer für alle Prospects.

- add / toggle → ändern den Bestand und speichern sofort
- query        → gefilterte + sortierte Snapshots (nur lesend)
- subscribe    → Beobachter erhalten nach jeder Änderung den neuen Snapshot

Der Store wird explizit erzeugt und an Verbraucher übergeben
(kein globales Singleton).
────────────────────────────────────────────
"""

from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, List, Optional, Tuple

from models.prospect import Prospect
from utils.errors import PersistenceError
from utils.prospect_repository import ProspectRepository

logger = logging.getLogger(__name__)

Snapshot = Tuple[Prospect, ...]
Observer = Callable[[Snapshot], None]


class ProspectFilter(str, enum.Enum):
    ALL = "all"
    CONTACTED = "contacted"
    UNCONTACTED = "uncontacted"

    @property
    def title(self) -> str:
        return {
            ProspectFilter.ALL: "Everyone",
            ProspectFilter.CONTACTED: "Contacted people",
            ProspectFilter.UNCONTACTED: "Uncontacted people",
        }[self]

    def matches(self, prospect: Prospect) -> bool:
        if self is ProspectFilter.CONTACTED:
            return prospect.is_contacted
        if self is ProspectFilter.UNCONTACTED:
            return not prospect.is_contacted
        return True


class ProspectSort(str, enum.Enum):
    NONE = "none"
    ALPHABETICAL = "alphabetical"
    MOST_RECENT = "most_recent"


class ProspectStore:
    """
    Besitzt die geordnete Prospect-Liste.

    Änderungen laufen seriell unter einem Lock: die neue Liste wird erst
    gespeichert und danach übernommen. Schlägt das Speichern fehl, bleibt
    der bisherige Snapshot unverändert.
    """

    def __init__(self, repository: Optional[ProspectRepository] = None):
        self._repository = repository
        self._lock = threading.Lock()
        self._observers: List[Observer] = []
        self._prospects: Snapshot = self._load()

    # ─────────────────────────────────────────────
    # 📂 Laden
    # ─────────────────────────────────────────────
    def _load(self) -> Snapshot:
        if self._repository is None:
            return ()
        try:
            return tuple(self._repository.load_all())
        except PersistenceError as e:
            logger.warning(f"⚠️ Gespeicherte Prospects unlesbar, starte leer: {e}")
            return ()

    def _commit(self, updated: Snapshot) -> None:
        # Aufrufer hält den Lock
        if self._repository is not None:
            self._repository.save_all(updated)
        self._prospects = updated

    def _notify(self, snapshot: Snapshot) -> None:
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("❌ Beobachter hat eine Ausnahme ausgelöst")

    # ─────────────────────────────────────────────
    # ✏️ Änderungen
    # ─────────────────────────────────────────────
    def add(self, prospect: Prospect) -> None:
        with self._lock:
            if any(p.identity == prospect.identity for p in self._prospects):
                raise ValueError(f"Identity bereits vorhanden: {prospect.identity}")
            self._commit(self._prospects + (prospect,))
            snapshot = self._prospects

        logger.info(f"➕ Prospect hinzugefügt: {prospect.name} <{prospect.email_address}>")
        self._notify(snapshot)

    def toggle(self, identity: str) -> None:
        with self._lock:
            index = next(
                (i for i, p in enumerate(self._prospects) if p.identity == identity),
                None,
            )
            if index is None:
                logger.debug(f"toggle ignoriert, unbekannte Identity {identity}")
                return

            updated = list(self._prospects)
            updated[index] = updated[index].toggled()
            self._commit(tuple(updated))
            snapshot = self._prospects

        logger.info(
            f"🔁 Prospect {identity} → contacted={snapshot[index].is_contacted}"
        )
        self._notify(snapshot)

    # ─────────────────────────────────────────────
    # 🔎 Lesen
    # ─────────────────────────────────────────────
    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._prospects

    def get(self, identity: str) -> Optional[Prospect]:
        return next((p for p in self.snapshot() if p.identity == identity), None)

    def query(
        self,
        filter: ProspectFilter = ProspectFilter.ALL,
        sort: ProspectSort = ProspectSort.NONE,
    ) -> Snapshot:
        selected = [p for p in self.snapshot() if filter.matches(p)]

        if sort is ProspectSort.ALPHABETICAL:
            # sorted() ist stabil → gleiche Namen behalten ihre Reihenfolge
            selected = sorted(selected, key=lambda p: p.name)
        elif sort is ProspectSort.MOST_RECENT:
            selected.reverse()

        return tuple(selected)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Registriert einen Beobachter und gibt eine Abmeldefunktion zurück."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def __len__(self) -> int:
        return len(self.snapshot())
