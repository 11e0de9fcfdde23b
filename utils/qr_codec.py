# =============================================================================
# 🧠 QR-Codec – Hot Prospects
# -----------------------------------------------------------------------------
# encode: Name + E-Mail → QR-Bild (200×200, harte Modulkanten)
# decode: gescannter Text → neuer Prospect
# Reine Funktionen ohne gemeinsamen Zustand, aus jedem Thread nutzbar.
# =============================================================================

from __future__ import annotations

import logging
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import qrcode
import qrcode.image.pil
from qrcode.exceptions import DataOverflowError
from PIL import Image, ImageColor, ImageDraw

from models.prospect import Prospect
from utils.errors import MalformedScanError, QRGenerationError
from utils.qr_config import QR_CARD_STYLE, QR_PLACEHOLDER_STYLE, get_error_correction

logger = logging.getLogger(__name__)

PAYLOAD_SEPARATOR = "\n"


# ---------------------------------------------------------------------------
# 🔤 Payload
# ---------------------------------------------------------------------------
def encode_text(name: str, email: str) -> str:
    return f"{name}{PAYLOAD_SEPARATOR}{email}"


def decode(scanned_text: str) -> Prospect:
    """
    Zerlegt den Scan an Zeilenumbrüchen. Nur genau zwei Teile
    (Name, E-Mail) ergeben einen neuen, nicht kontaktierten Prospect.
    """
    details = scanned_text.split(PAYLOAD_SEPARATOR)
    if len(details) != 2:
        raise MalformedScanError(scanned_text, len(details))

    name, email = details
    return Prospect(name=name, email_address=email)


# ---------------------------------------------------------------------------
# 🖼️ Rendering
# ---------------------------------------------------------------------------
def render_qr(payload: str, size: Optional[int] = None) -> Image.Image:
    """
    Rendert den Payload als quadratisches RGB-Bild.
    Skalierung mit NEAREST, damit die Module scharfkantig bleiben.
    """
    if not payload or not payload.strip():
        raise QRGenerationError("Leerer QR-Payload")

    size = size or QR_CARD_STYLE["size"]
    qr = qrcode.QRCode(
        version=None,
        error_correction=get_error_correction(QR_CARD_STYLE["error_correction"]),
        box_size=QR_CARD_STYLE["box_size"],
        border=QR_CARD_STYLE["border"],
    )
    qr.add_data(payload)
    try:
        qr.make(fit=True)
    except DataOverflowError as e:
        raise QRGenerationError(f"Payload zu groß für QR-Code ({len(payload)} Zeichen)") from e

    img = qr.make_image(
        image_factory=qrcode.image.pil.PilImage,
        fill_color=QR_CARD_STYLE["fg"],
        back_color=QR_CARD_STYLE["bg"],
    ).convert("RGB")

    return img.resize((size, size), Image.Resampling.NEAREST)


def placeholder_image(size: Optional[int] = None) -> Image.Image:
    """Durchgestrichener Kreis als Ersatzbild."""
    size = size or QR_CARD_STYLE["size"]
    style = QR_PLACEHOLDER_STYLE
    img = Image.new("RGB", (size, size), ImageColor.getrgb(style["bg"]))
    draw = ImageDraw.Draw(img)

    m = style["margin"]
    fg = ImageColor.getrgb(style["fg"])
    width = style["line_width"]
    draw.ellipse((m, m, size - m, size - m), outline=fg, width=width)

    inner = m + size // 5
    draw.line((inner, inner, size - inner, size - inner), fill=fg, width=width)
    draw.line((inner, size - inner, size - inner, inner), fill=fg, width=width)
    return img


def encode(name: str, email: str, size: Optional[int] = None) -> Image.Image:
    payload = encode_text(name, email)
    try:
        return render_qr(payload, size=size)
    except QRGenerationError as e:
        logger.warning(f"⚠️ QR-Code konnte nicht erzeugt werden, nutze Platzhalter: {e}")
        return placeholder_image(size=size)


# ---------------------------------------------------------------------------
# 💾 Export (Anzeige / Fotoalbum)
# ---------------------------------------------------------------------------
def to_png_bytes(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def save_qr_image(
    image: Image.Image,
    directory: Union[str, Path],
    filename: Optional[str] = None,
) -> Path:
    """Übergibt das Bild an das Dateisystem und meldet den Pfad zurück."""
    output_dir = Path(directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    filename = filename or f"qr_{uuid.uuid4().hex[:10]}.png"
    file_path = output_dir / filename

    image.save(file_path, format="PNG")
    logger.info(f"✅ QR-Code gespeichert unter: {file_path}")
    return file_path
