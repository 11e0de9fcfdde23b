"""
utils/qr_config.py
────────────────────────────────────────────
QR-Code-Einstellungen für die persönliche Visitenkarte ("Your Code").

Die Werte sind fest, damit derselbe Name + E-Mail immer exakt
dasselbe Bild ergibt.
────────────────────────────────────────────
"""

from typing import Any, Dict

from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

# ─────────────────────────────────────────────
# 🎨 STANDARDDESIGN
# ─────────────────────────────────────────────
QR_CARD_STYLE: Dict[str, Any] = {
    "size": 200,
    "fg": "#000000",
    "bg": "#FFFFFF",
    "box_size": 10,
    "border": 4,
    "error_correction": "M",
}

# ─────────────────────────────────────────────
# ❌ PLATZHALTER (wenn kein QR erzeugt werden kann)
# ─────────────────────────────────────────────
QR_PLACEHOLDER_STYLE: Dict[str, Any] = {
    "fg": "#8E8E93",
    "bg": "#FFFFFF",
    "line_width": 12,
    "margin": 24,
}

ERROR_CORRECTION_LEVELS: Dict[str, int] = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

# Standardwerte der Visitenkarte (Formular "Your Code")
DEFAULT_CARD_NAME = "Anonymous"
DEFAULT_CARD_EMAIL = "you@yoursite.com"


def get_error_correction(level: str) -> int:
    """Unbekannte Stufen fallen auf "M" zurück."""
    return ERROR_CORRECTION_LEVELS.get(level.upper(), ERROR_CORRECT_M)
