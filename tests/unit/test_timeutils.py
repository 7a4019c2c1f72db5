from datetime import datetime, timezone

from eventdesk.utils.timeutils import ensure_aware, format_display, hour_key, stats_timezone


def test_ensure_aware_attaches_utc():
    naive = datetime(2025, 4, 12, 9, 30)
    assert ensure_aware(naive).tzinfo is timezone.utc
    assert ensure_aware(None) is None


def test_hour_key_uses_unpadded_hour():
    assert hour_key(datetime(2025, 4, 12, 9, 5, tzinfo=timezone.utc)) == "9:00"
    assert hour_key(datetime(2025, 4, 12, 17, 59, tzinfo=timezone.utc)) == "17:00"
    assert hour_key(datetime(2025, 4, 12, 0, 0)) == "0:00"


def test_stats_timezone_shifts_buckets(monkeypatch):
    monkeypatch.setenv("STATS_TIMEZONE", "America/New_York")
    # 14:00 UTC in April is 10:00 in New York
    assert hour_key(datetime(2025, 4, 12, 14, 0, tzinfo=timezone.utc)) == "10:00"


def test_unknown_timezone_falls_back_to_utc(monkeypatch):
    monkeypatch.setenv("STATS_TIMEZONE", "Mars/Olympus_Mons")
    assert stats_timezone() is timezone.utc


def test_format_display():
    assert format_display(datetime(2025, 4, 12, 9, 5, 7)) == "2025-04-12 09:05:07"
    assert format_display(None) is None
