"""
🪪 Persönlicher QR-Code ("Your Code")
────────────────────────────────────────────
- GET /me/qr → PNG mit "<Name>\\n<E-Mail>"

Das Frontend ruft die Route bei jeder Änderung von Name oder E-Mail
erneut auf.
────────────────────────────────────────────
"""

from fastapi import APIRouter
from fastapi.responses import Response

from utils.qr_codec import encode, to_png_bytes
from utils.qr_config import DEFAULT_CARD_EMAIL, DEFAULT_CARD_NAME

router = APIRouter(prefix="/me", tags=["Your Code"])


@router.get("/qr")
def my_qr_code(name: str = DEFAULT_CARD_NAME, email: str = DEFAULT_CARD_EMAIL):
    image = encode(name, email)
    return Response(content=to_png_bytes(image), media_type="image/png")
