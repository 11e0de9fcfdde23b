# =============================================================================
# 🚀 Hot Prospects – Hauptapplikation (main.py)
# =============================================================================

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from dotenv import load_dotenv

from database import build_engine, build_session_factory
from utils.notification_center import (
    AuthorizationStatus,
    LocalNotificationCenter,
    deny_prompt,
    grant_prompt,
)
from utils.prospect_repository import ProspectRepository
from utils.prospect_store import ProspectStore
from utils.reminder_scheduler import NotificationCenter, ReminderScheduler

# -------------------------------------------------------------------------
# 1️⃣ .env laden (muss ganz oben sein!)
# -------------------------------------------------------------------------
env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)
logger = logging.getLogger("hot_prospects")


def _auto_grant() -> bool:
    return os.getenv("REMINDER_AUTO_GRANT", "0").lower() in {"1", "true", "yes"}


# -------------------------------------------------------------------------
# 2️⃣ App-Factory
# -------------------------------------------------------------------------
def create_app(
    database_url: Optional[str] = None,
    notification_center: Optional[NotificationCenter] = None,
) -> FastAPI:
    """
    Baut die App mit genau einem Store, Scheduler und Benachrichtigungs-Center.
    Routen erhalten sie über app.state (siehe routes.prospects.get_store).
    """
    engine = build_engine(database_url)
    repository = ProspectRepository(engine, build_session_factory(engine))
    repository.create_schema()

    center = notification_center or LocalNotificationCenter(
        status=AuthorizationStatus.NOT_DETERMINED,
        prompt=grant_prompt if _auto_grant() else deny_prompt,
    )

    app = FastAPI(title="Hot Prospects", version="1.0")
    app.state.store = ProspectStore(repository)
    app.state.notification_center = center
    app.state.scheduler = ReminderScheduler(center)

    # ---------------------------------------------------------------------
    # 3️⃣ Routen laden
    # ---------------------------------------------------------------------
    from routes import me
    from routes import prospects

    app.include_router(prospects.router)
    app.include_router(me.router)

    logger.info(f"✅ Hot Prospects gestartet ({len(app.state.store)} Prospects geladen)")
    return app
