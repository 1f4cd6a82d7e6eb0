"""QR image rendering for encoded tokens."""

from __future__ import annotations

import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_H

from ..token.codec import TokenCodec
from ..token.types import TokenPayload


def render_png(text: str, *, box_size: int = 10, border: int = 4) -> bytes:
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_H, box_size=box_size, border=border)
    qr.add_data(text)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def render_data_uri(payload: TokenPayload, **kwargs: int) -> str:
    """Encode ``payload`` to its wire text and return it as a PNG data URI."""
    png = render_png(TokenCodec.dumps(payload), **kwargs)
    return f"data:image/png;base64,{base64.b64encode(png).decode('ascii')}"
