# =============================================================================
# 📦 Prospect Model – Kontakt-Entity + persistente Tabelle (SQLAlchemy 2.0)
# =============================================================================

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from database import Base


def new_identity() -> str:
    return str(uuid.uuid4())


# =============================================================================
# 🧩 Prospect – unveränderlicher Datensatz
# =============================================================================
@dataclass(frozen=True)
class Prospect:
    """
    Ein verfolgter Kontakt (Name, E-Mail, Kontaktstatus).

    Die `identity` wird bei der Erstellung vergeben und nie wieder geändert.
    Änderungen erzeugen eine neue Instanz mit derselben `identity`.
    """

    name: str
    email_address: str
    is_contacted: bool = False
    identity: str = field(default_factory=new_identity)

    def toggled(self) -> "Prospect":
        return replace(self, is_contacted=not self.is_contacted)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identity": self.identity,
            "name": self.name,
            "email_address": self.email_address,
            "is_contacted": self.is_contacted,
        }


# =============================================================================
# 🗄️ ProspectRecord – Zeile in der Tabelle "prospects"
# =============================================================================
class ProspectRecord(Base):
    __tablename__ = "prospects"

    identity: Mapped[str] = mapped_column(String(36), primary_key=True)
    # Einfügereihenfolge – bestimmt die Sortierung beim Laden
    position: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email_address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    is_contacted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    @classmethod
    def from_prospect(cls, prospect: Prospect, position: int) -> "ProspectRecord":
        return cls(
            identity=prospect.identity,
            position=position,
            name=prospect.name,
            email_address=prospect.email_address,
            is_contacted=prospect.is_contacted,
        )

    def to_prospect(self) -> Prospect:
        return Prospect(
            identity=self.identity,
            name=self.name,
            email_address=self.email_address,
            is_contacted=bool(self.is_contacted),
        )

    def __repr__(self) -> str:
        return (
            f"<ProspectRecord(identity='{self.identity}', position={self.position}, "
            f"name='{self.name}', contacted={self.is_contacted})>"
        )
