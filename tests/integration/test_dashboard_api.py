from urllib.parse import quote

from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.utils.feature_flags import refresh_feature_flag_cache


def _seed(db, make_user, event, registered=3, checked_in=1):
    regs = [
        registration_repo.create_registration(db, user_id=make_user().id, event_id=event.id)
        for _ in range(registered)
    ]
    for reg in regs[:checked_in]:
        registration_repo.mark_checked_in(db, reg.id)
    return regs


def test_event_stats(client, auth, volunteer, event, db, make_user):
    _seed(db, make_user, event)
    resp = client.get(f"/events/{event.id}/stats", headers=auth(volunteer))
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_registered"] == 3
    assert body["total_checked_in"] == 1
    assert body["check_in_rate"] == 0.3333
    assert sum(b["count"] for b in body["registrations_by_hour"]) == 3
    assert sum(b["count"] for b in body["checkins_by_hour"]) == 1


def test_stats_forbidden_for_participants(client, auth, participant, event):
    assert client.get(f"/events/{event.id}/stats", headers=auth(participant)).status_code == 403


def test_stats_limited_to_own_events_for_organizers(client, auth, make_user, event):
    stranger = make_user("organizer")
    assert client.get(f"/events/{event.id}/stats", headers=auth(stranger)).status_code == 403


def test_dashboard_summary_for_organizer(client, auth, organizer, db, make_user, make_event):
    first = make_event("First")
    second = make_event("Second")
    make_event("Someone else's", owner=make_user("organizer"))
    _seed(db, make_user, first, registered=2, checked_in=2)
    _seed(db, make_user, second, registered=2, checked_in=0)

    body = client.get("/dashboard", headers=auth(organizer)).json()
    assert body["total_events"] == 2
    assert body["total_registered"] == 4
    assert body["total_checked_in"] == 2
    rates = {e["name"]: e["check_in_rate"] for e in body["events"]}
    assert rates == {"First": 1.0, "Second": 0.0}


def test_dashboard_for_volunteer_covers_active_events(client, auth, volunteer, make_event):
    make_event("Open")
    make_event("Closed", active=False)
    body = client.get("/dashboard", headers=auth(volunteer)).json()
    assert [e["name"] for e in body["events"]] == ["Open"]


def test_export_csv(client, auth, organizer, event, db, make_user):
    _seed(db, make_user, event, registered=2, checked_in=1)
    resp = client.get(f"/events/{event.id}/export.csv", headers=auth(organizer))
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert 'filename="Spring Meetup_attendance_' in resp.headers["content-disposition"]
    assert "filename*" not in resp.headers["content-disposition"]
    lines = resp.text.split("\n")
    assert lines[0] == "Event: Spring Meetup"
    assert lines[3] == "Name,Email,Phone,Registered At,Checked In,Checked In At"
    assert len([l for l in lines[4:] if l]) == 2


def test_export_requires_organizer(client, auth, volunteer, event):
    assert client.get(f"/events/{event.id}/export.csv", headers=auth(volunteer)).status_code == 403


def test_export_disabled_by_flag(client, auth, organizer, event, monkeypatch):
    monkeypatch.setenv("FEATURE_CSV_EXPORT_ENABLED", "false")
    refresh_feature_flag_cache()
    assert client.get(f"/events/{event.id}/export.csv", headers=auth(organizer)).status_code == 404


def test_export_is_audited(client, auth, organizer, event):
    client.get(f"/events/{event.id}/export.csv", headers=auth(organizer))
    audits = client.get("/audits", params={"action_type": "attendance_export"}, headers=auth(organizer)).json()
    assert len(audits) == 1
    assert audits[0]["metadata"]["filename"].endswith(".csv")


def test_export_non_latin1_event_name(client, auth, organizer, make_event):
    summit = make_event("技术大会 Tech Summit")
    resp = client.get(f"/events/{summit.id}/export.csv", headers=auth(organizer))
    assert resp.status_code == 200
    disposition = resp.headers["content-disposition"]
    assert 'filename="____ Tech Summit_attendance_' in disposition
    assert "filename*=UTF-8''" + quote("技术大会 Tech Summit_attendance_") in disposition
    assert resp.text.split("\n")[0] == "Event: 技术大会 Tech Summit"
