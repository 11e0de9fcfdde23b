"""
utils/notification_center.py
────────────────────────────────────────────
Lokales Benachrichtigungs-Center (Plattformseite der Erinnerungen).

- Berechtigungsstatus + asynchrone Berechtigungsanfrage
- Liste der ausstehenden Benachrichtigungen
- Kalender-Trigger ("nächstes Mal 09:00 Uhr")
────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import enum
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Awaitable, Callable, FrozenSet, Iterable, List, Optional

from utils.errors import NotificationCenterError

logger = logging.getLogger(__name__)


class AuthorizationStatus(str, enum.Enum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    AUTHORIZED = "authorized"


class AuthorizationOption(str, enum.Enum):
    ALERT = "alert"
    BADGE = "badge"
    SOUND = "sound"


# =============================================================================
# 🕘 Trigger & Inhalt
# =============================================================================
@dataclass(frozen=True)
class CalendarTrigger:
    hour: int = 9
    minute: int = 0
    repeats: bool = False

    def next_fire_date(self, now: Optional[datetime] = None) -> datetime:
        """Nächster Zeitpunkt mit hour:minute in lokaler Zeit (heute oder morgen)."""
        if now is None:
            # auf der Wanduhr rechnen, erst danach lokalisieren (Sommer-/Winterzeit)
            return self.next_fire_date(datetime.now()).astimezone()
        candidate = now.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        if candidate <= now:
            candidate += timedelta(days=1)
        return candidate


@dataclass(frozen=True)
class NotificationContent:
    title: str
    subtitle: str = ""
    sound: bool = True


@dataclass(frozen=True)
class NotificationRequest:
    content: NotificationContent
    trigger: CalendarTrigger
    identifier: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "title": self.content.title,
            "subtitle": self.content.subtitle,
            "sound": self.content.sound,
            "trigger": {
                "hour": self.trigger.hour,
                "minute": self.trigger.minute,
                "repeats": self.trigger.repeats,
                "next_fire_date": self.trigger.next_fire_date().isoformat(),
            },
        }


PermissionPrompt = Callable[[FrozenSet[AuthorizationOption]], Awaitable[bool]]


async def deny_prompt(options: FrozenSet[AuthorizationOption]) -> bool:
    return False


async def grant_prompt(options: FrozenSet[AuthorizationOption]) -> bool:
    return True


# =============================================================================
# 🔔 LocalNotificationCenter
# =============================================================================
class LocalNotificationCenter:
    """
    In-Process-Center. Die Berechtigungsanfrage wird an `prompt` delegiert
    (z. B. einen Dialog im Frontend); ihr Ergebnis wird gemerkt.
    """

    def __init__(
        self,
        status: AuthorizationStatus = AuthorizationStatus.NOT_DETERMINED,
        prompt: Optional[PermissionPrompt] = None,
    ):
        self._status = status
        self._prompt = prompt or deny_prompt
        self._pending: List[NotificationRequest] = []
        self._lock = asyncio.Lock()

    async def authorization_status(self) -> AuthorizationStatus:
        return self._status

    async def request_authorization(self, options: Iterable[AuthorizationOption]) -> bool:
        granted = await self._prompt(frozenset(options))
        self._status = AuthorizationStatus.AUTHORIZED if granted else AuthorizationStatus.DENIED
        logger.info(f"🔐 Benachrichtigungen {'erlaubt' if granted else 'abgelehnt'}")
        return granted

    async def add(self, request: NotificationRequest) -> None:
        if self._status is not AuthorizationStatus.AUTHORIZED:
            raise NotificationCenterError("Benachrichtigungen sind nicht erlaubt")
        if not isinstance(request.trigger, CalendarTrigger):
            raise NotificationCenterError(f"Unbekannter Trigger: {request.trigger!r}")

        async with self._lock:
            if any(p.identifier == request.identifier for p in self._pending):
                raise NotificationCenterError(f"Identifier bereits vergeben: {request.identifier}")
            self._pending.append(request)

        logger.info(
            f"📅 Benachrichtigung '{request.content.title}' geplant für "
            f"{request.trigger.next_fire_date():%Y-%m-%d %H:%M}"
        )

    def pending_requests(self) -> List[NotificationRequest]:
        return list(self._pending)

    def remove_pending(self, identifiers: Iterable[str]) -> None:
        drop = set(identifiers)
        self._pending = [p for p in self._pending if p.identifier not in drop]
