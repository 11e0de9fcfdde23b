"""
utils/reminder_scheduler.py
────────────────────────────────────────────
Plant einmalige Erinnerungen ("Contact <Name>") für einen Prospect.

Ablauf pro Aufruf:
    UNREQUESTED → (AUTHORIZED)            → SCHEDULING → SCHEDULED
    UNREQUESTED → REQUESTING_PERMISSION   → SCHEDULING → SCHEDULED
                                          ↘ FAILED (abgelehnt)
    SCHEDULING  → FAILED (Center lehnt Anfrage ab)

Der Scheduler verändert den Prospect nie und merkt sich nichts zwischen
den Aufrufen: zweimal planen ergibt zwei Erinnerungen.
────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Callable, Optional, Protocol, Iterable

from models.prospect import Prospect
from utils.errors import (
    NotificationCenterError,
    NotificationSubmissionError,
    PermissionDeniedError,
)
from utils.notification_center import (
    AuthorizationOption,
    AuthorizationStatus,
    CalendarTrigger,
    NotificationContent,
    NotificationRequest,
)

logger = logging.getLogger(__name__)

REMINDER_HOUR = 9
REMINDER_OPTIONS = (AuthorizationOption.ALERT, AuthorizationOption.BADGE, AuthorizationOption.SOUND)


class ReminderState(str, enum.Enum):
    UNREQUESTED = "unrequested"
    REQUESTING_PERMISSION = "requesting_permission"
    SCHEDULING = "scheduling"
    SCHEDULED = "scheduled"
    FAILED = "failed"


class NotificationCenter(Protocol):
    async def authorization_status(self) -> AuthorizationStatus: ...

    async def request_authorization(self, options: Iterable[AuthorizationOption]) -> bool: ...

    async def add(self, request: NotificationRequest) -> None: ...


StateListener = Callable[[str, ReminderState], None]


def build_request(prospect: Prospect) -> NotificationRequest:
    content = NotificationContent(
        title=f"Contact {prospect.name}",
        subtitle=prospect.email_address,
        sound=True,
    )
    return NotificationRequest(
        content=content,
        trigger=CalendarTrigger(hour=REMINDER_HOUR, minute=0, repeats=False),
    )


class ReminderScheduler:
    def __init__(
        self,
        center: NotificationCenter,
        on_state_change: Optional[StateListener] = None,
    ):
        self.center = center
        self.on_state_change = on_state_change

    def _transition(self, prospect: Prospect, state: ReminderState) -> None:
        logger.debug(f"⏰ Erinnerung {prospect.identity}: {state.value}")
        if self.on_state_change is not None:
            self.on_state_change(prospect.identity, state)

    async def schedule(self, prospect: Prospect) -> NotificationRequest:
        """
        Plant eine Erinnerung für morgen bzw. heute 09:00 Uhr.

        Ausnahmen:
            PermissionDeniedError: Benutzer hat die Berechtigung verweigert.
            NotificationSubmissionError: Center hat die Anfrage abgelehnt.
        """
        self._transition(prospect, ReminderState.UNREQUESTED)

        status = await self.center.authorization_status()
        if status is not AuthorizationStatus.AUTHORIZED:
            self._transition(prospect, ReminderState.REQUESTING_PERMISSION)
            granted = await self.center.request_authorization(REMINDER_OPTIONS)
            if not granted:
                self._transition(prospect, ReminderState.FAILED)
                logger.warning(f"⚠️ Keine Erinnerung für {prospect.name}: Berechtigung verweigert")
                raise PermissionDeniedError("Benachrichtigungen wurden nicht erlaubt")

        self._transition(prospect, ReminderState.SCHEDULING)
        request = build_request(prospect)
        try:
            await self.center.add(request)
        except NotificationCenterError as e:
            self._transition(prospect, ReminderState.FAILED)
            logger.error(f"❌ Erinnerung für {prospect.name} abgelehnt: {e}")
            raise NotificationSubmissionError(str(e)) from e

        self._transition(prospect, ReminderState.SCHEDULED)
        logger.info(f"✅ Erinnerung geplant: {request.content.title} ({request.identifier})")
        return request

    def schedule_in_background(self, prospect: Prospect) -> "asyncio.Task[NotificationRequest]":
        """Startet `schedule` als Task; Ergebnis oder Fehler liegen im Task."""
        return asyncio.get_running_loop().create_task(self.schedule(prospect))
