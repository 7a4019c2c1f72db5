"""
QR code rendering.

Turns a registration's QR payload into a PNG (for downloads and email
attachments) or a base64 data URI (for JSON responses).
"""
from __future__ import annotations

import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M

DEFAULT_BOX_SIZE = 10
DEFAULT_BORDER = 2


def render_qr_png(payload: str, *, box_size: int = DEFAULT_BOX_SIZE, border: int = DEFAULT_BORDER) -> bytes:
    if not payload:
        raise ValueError("QR payload must be a non-empty string")
    qr = qrcode.QRCode(version=None, error_correction=ERROR_CORRECT_M, box_size=box_size, border=border)
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def render_qr_data_uri(payload: str, **kwargs) -> str:
    encoded_png = base64.b64encode(render_qr_png(payload, **kwargs)).decode("ascii")
    return f"data:image/png;base64,{encoded_png}"
