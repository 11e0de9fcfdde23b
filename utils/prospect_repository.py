# utils/prospect_repository.py
# =============================================================================
# ✅ Speicherlogik für Prospects
# - Laden in Einfügereihenfolge
# - Speichern eines kompletten Snapshots in EINER Transaktion
# =============================================================================

from __future__ import annotations

import logging
from typing import List, Sequence

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from database import Base
from models.prospect import Prospect, ProspectRecord
from utils.errors import PersistenceError

logger = logging.getLogger(__name__)


class ProspectRepository:
    """Liest und schreibt die Tabelle `prospects`."""

    def __init__(self, engine: Engine, session_factory: sessionmaker):
        self.engine = engine
        self.session_factory = session_factory

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(self.engine, tables=[ProspectRecord.__table__])
        except SQLAlchemyError as e:
            raise PersistenceError(f"Tabelle 'prospects' konnte nicht angelegt werden: {e}") from e

    # =========================================================================
    # ✅ LADEN
    # =========================================================================
    def load_all(self) -> List[Prospect]:
        try:
            with self.session_factory() as db:
                rows = db.scalars(select(ProspectRecord).order_by(ProspectRecord.position)).all()
                prospects = [row.to_prospect() for row in rows]
        except (SQLAlchemyError, ValueError, TypeError) as e:
            # ValueError/TypeError: defekte Zellwerte (z. B. unlesbares Datum)
            raise PersistenceError(f"Prospects konnten nicht geladen werden: {e}") from e

        logger.info(f"📂 {len(prospects)} Prospect(s) geladen")
        return prospects

    # =========================================================================
    # ✅ SPEICHERN
    # =========================================================================
    def save_all(self, prospects: Sequence[Prospect]) -> None:
        """
        Schreibt den Snapshot vollständig oder gar nicht.
        Zeilen, die nicht im Snapshot stehen, werden gelöscht; bestehende
        werden per Identity aktualisiert, neue angehängt.
        """
        identities = [p.identity for p in prospects]
        try:
            with self.session_factory() as db:
                with db.begin():
                    db.execute(
                        delete(ProspectRecord).where(ProspectRecord.identity.not_in(identities)),
                        execution_options={"synchronize_session": False},
                    )
                    for position, prospect in enumerate(prospects):
                        db.merge(ProspectRecord.from_prospect(prospect, position))
        except (SQLAlchemyError, ValueError, TypeError) as e:
            logger.error(f"❌ Speichern fehlgeschlagen ({len(prospects)} Prospects): {e}")
            raise PersistenceError(f"Prospects konnten nicht gespeichert werden: {e}") from e

        logger.debug(f"💾 Snapshot mit {len(prospects)} Prospect(s) gespeichert")
