from urllib.parse import parse_qs, urlparse

from eventdesk.utils.urls import build_ticket_link, get_app_base_url


def test_base_url_prefers_app_base_url(monkeypatch):
    monkeypatch.setenv("APP_BASE_URL", "https://checkin.example.org/")
    monkeypatch.setenv("APP_HOST", "ignored.example.org")
    assert get_app_base_url() == "https://checkin.example.org"


def test_base_url_from_app_host_adds_scheme(monkeypatch):
    monkeypatch.delenv("APP_BASE_URL", raising=False)
    monkeypatch.setenv("APP_HOST", "checkin.example.org")
    assert get_app_base_url() == "https://checkin.example.org"

    monkeypatch.setenv("APP_HOST", "localhost:5173")
    assert get_app_base_url() == "http://localhost:5173"


def test_base_url_default(monkeypatch):
    monkeypatch.delenv("APP_BASE_URL", raising=False)
    monkeypatch.delenv("APP_HOST", raising=False)
    assert get_app_base_url() == "http://localhost:3000"


def test_ticket_link_encodes_query(monkeypatch):
    monkeypatch.setenv("APP_BASE_URL", "https://checkin.example.org")
    link = build_ticket_link(registration_id="abc", email="a+b@example.com")
    parsed = urlparse(link)
    assert parsed.path == "/events/ticket"
    assert parse_qs(parsed.query) == {"registration": ["abc"], "email": ["a+b@example.com"]}
