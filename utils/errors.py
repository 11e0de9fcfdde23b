# =============================================================================
# ❗ utils/errors.py – Fehlerklassen für Hot Prospects
# -----------------------------------------------------------------------------
# Jede Komponente (Store, QR-Codec, Erinnerungen) meldet Fehler über eine
# eigene Klasse, damit Routen gezielt darauf reagieren können.
# =============================================================================

from __future__ import annotations


class HotProspectsError(Exception):
    """Basisklasse für alle fachlichen Fehler."""


class MalformedScanError(HotProspectsError, ValueError):
    """Gescannter Text besteht nicht aus genau zwei Zeilen (Name + E-Mail)."""

    def __init__(self, text: str, parts: int):
        super().__init__(f"Scan enthält {parts} Zeile(n), erwartet werden genau 2")
        self.text = text
        self.parts = parts


class QRGenerationError(HotProspectsError):
    """QR-Payload konnte nicht gerendert werden."""


class PermissionDeniedError(HotProspectsError):
    """Benutzer hat Benachrichtigungen nicht erlaubt."""


class NotificationSubmissionError(HotProspectsError):
    """Benachrichtigungs-Center hat die Anfrage abgelehnt."""


class NotificationCenterError(Exception):
    """Fehler innerhalb des Benachrichtigungs-Centers (Plattformseite)."""


class PersistenceError(HotProspectsError):
    """Laden oder Speichern der Prospects ist fehlgeschlagen."""
