import base64

import pytest

from eventdesk.services.qr_service import render_qr_data_uri, render_qr_png

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_render_qr_png_returns_png_bytes():
    png = render_qr_png("event-abc-user-def-reg-123")
    assert png.startswith(PNG_SIGNATURE)


def test_render_qr_png_rejects_empty_payload():
    with pytest.raises(ValueError):
        render_qr_png("")


def test_render_qr_data_uri_wraps_png():
    uri = render_qr_data_uri("event-abc-user-def-reg-123")
    prefix = "data:image/png;base64,"
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix):]).startswith(PNG_SIGNATURE)
