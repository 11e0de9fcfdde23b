"""
🗂️ Prospect-Routen – Hot Prospects
────────────────────────────────────────────
- GET  /prospects                    → gefilterte + sortierte Liste
- POST /prospects                    → manuelle Eingabe (Name + E-Mail)
- POST /prospects/scan               → gescannten Text übernehmen
- POST /prospects/{identity}/toggle  → kontaktiert / nicht kontaktiert
- POST /prospects/{identity}/remind  → Erinnerung für 09:00 Uhr planen

Store und Scheduler kommen aus app.state (siehe main.create_app).
────────────────────────────────────────────
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from models.prospect import Prospect
from utils.errors import (
    MalformedScanError,
    NotificationSubmissionError,
    PermissionDeniedError,
    PersistenceError,
)
from utils.prospect_store import ProspectFilter, ProspectSort, ProspectStore
from utils.qr_codec import decode
from utils.reminder_scheduler import ReminderScheduler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/prospects", tags=["Prospects"])


class CreateProspectIn(BaseModel):
    name: str = Field(..., description="Display name")
    email_address: str = Field(default="")


class ScanIn(BaseModel):
    text: str = Field(..., description="Raw scanner payload: '<name>\\n<email>'")


def get_store(request: Request) -> ProspectStore:
    return request.app.state.store


def get_scheduler(request: Request) -> ReminderScheduler:
    return request.app.state.scheduler


def _add(store: ProspectStore, prospect: Prospect) -> dict[str, Any]:
    try:
        store.add(prospect)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return prospect.to_dict()


@router.get("")
def list_prospects(
    filter: ProspectFilter = ProspectFilter.ALL,
    sort: ProspectSort = ProspectSort.NONE,
    store: ProspectStore = Depends(get_store),
):
    prospects = store.query(filter, sort)
    return {
        "title": filter.title,
        "prospects": [p.to_dict() for p in prospects],
    }


@router.post("", status_code=201)
def create_prospect(payload: CreateProspectIn, store: ProspectStore = Depends(get_store)):
    return _add(store, Prospect(name=payload.name, email_address=payload.email_address))


@router.post("/scan", status_code=201)
def scan_prospect(payload: ScanIn, store: ProspectStore = Depends(get_store)):
    try:
        prospect = decode(payload.text)
    except MalformedScanError as e:
        logger.info(f"Scan verworfen: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return _add(store, prospect)


@router.post("/{identity}/toggle")
def toggle_prospect(identity: str, store: ProspectStore = Depends(get_store)):
    if store.get(identity) is None:
        raise HTTPException(status_code=404, detail="Prospect not found")
    try:
        store.toggle(identity)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return store.get(identity).to_dict()


@router.post("/{identity}/remind", status_code=201)
async def remind_prospect(
    identity: str,
    store: ProspectStore = Depends(get_store),
    scheduler: ReminderScheduler = Depends(get_scheduler),
):
    prospect = store.get(identity)
    if prospect is None:
        raise HTTPException(status_code=404, detail="Prospect not found")
    try:
        request = await scheduler.schedule(prospect)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotificationSubmissionError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return request.to_dict()
