# =============================================================================
# 🗄️ database.py
# -----------------------------------------------------------------------------
# SQLAlchemy-Datenbankkonfiguration für Hot Prospects
# Standard: lokale SQLite-Datei, per .env überschreibbar
# =============================================================================

import os
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

# 🔹 .env laden (z. B. aus .env-Datei im Projektverzeichnis)
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./hot_prospects.db"

# 🔹 Basisklasse für alle SQLAlchemy-Modelle
Base = declarative_base()


def get_database_url() -> str:
    return os.getenv("PROSPECTS_DATABASE_URL", DEFAULT_DATABASE_URL)


def build_engine(url: Optional[str] = None) -> Engine:
    """
    Erstellt eine Engine für die angegebene URL (oder aus der Umgebung).
    SQLite braucht check_same_thread=False, weil FastAPI Threads wechselt.
    """
    url = url or get_database_url()
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    # 🔹 SessionFactory – erzeugt Sessions für jeden Lade-/Speichervorgang
    return sessionmaker(
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )
