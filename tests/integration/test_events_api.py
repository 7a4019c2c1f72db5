def test_create_event_as_organizer(client, auth, organizer):
    resp = client.post(
        "/events",
        json={"name": "  Hack Night ", "description": "Bring a laptop", "date": "2025-05-01", "location": "Lab"},
        headers=auth(organizer),
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["name"] == "Hack Night"
    assert body["organizer_id"] == str(organizer.id)
    assert body["is_active"] is True


def test_create_event_requires_name(client, auth, organizer):
    resp = client.post("/events", json={"name": "   "}, headers=auth(organizer))
    assert resp.status_code == 422


def test_create_event_forbidden_for_volunteer(client, auth, volunteer):
    resp = client.post("/events", json={"name": "Nope"}, headers=auth(volunteer))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "You don't have permission to access this page."


def test_listing_depends_on_role(client, auth, organizer, participant, make_user, make_event):
    other = make_user("organizer")
    mine = make_event("Mine")
    closed = make_event("Closed", active=False)
    theirs = make_event("Theirs", owner=other)

    organizer_view = {e["id"] for e in client.get("/events", headers=auth(organizer)).json()}
    assert organizer_view == {str(mine.id), str(closed.id)}

    participant_view = {e["id"] for e in client.get("/events", headers=auth(participant)).json()}
    assert participant_view == {str(mine.id), str(theirs.id)}


def test_get_event_hides_inactive_from_participants(client, auth, participant, organizer, make_event):
    closed = make_event("Closed", active=False)
    assert client.get(f"/events/{closed.id}", headers=auth(participant)).status_code == 404
    assert client.get(f"/events/{closed.id}", headers=auth(organizer)).status_code == 200


def test_update_event_toggles_active_and_audits(client, auth, organizer, event, db):
    resp = client.patch(f"/events/{event.id}", json={"is_active": False}, headers=auth(organizer))
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False

    audits = client.get("/audits", params={"event_id": str(event.id)}, headers=auth(organizer)).json()
    assert "event_deactivate" in {a["action_type"] for a in audits}


def test_update_event_only_by_owner(client, auth, make_user, event):
    stranger = make_user("organizer")
    resp = client.patch(f"/events/{event.id}", json={"name": "Hijacked"}, headers=auth(stranger))
    assert resp.status_code == 403


def test_update_unknown_event(client, auth, organizer):
    import uuid

    resp = client.patch(f"/events/{uuid.uuid4()}", json={"name": "x"}, headers=auth(organizer))
    assert resp.status_code == 404


def test_event_registrations_with_attendees(client, auth, volunteer, participant, event, db):
    from eventdesk.db.repositories import registrations as registration_repo

    registration = registration_repo.create_registration(db, user_id=participant.id, event_id=event.id)
    body = client.get(f"/events/{event.id}/registrations", headers=auth(volunteer)).json()
    assert len(body) == 1
    assert body[0]["id"] == str(registration.id)
    assert body[0]["attendee"] == {
        "id": str(participant.id),
        "name": "Paula Participant",
        "email": participant.email,
        "phone": "555-0100",
    }

    registration_repo.mark_checked_in(db, registration.id)
    assert client.get(
        f"/events/{event.id}/registrations", params={"checked_in": "false"}, headers=auth(volunteer)
    ).json() == []


def test_event_registrations_hidden_from_participants(client, auth, participant, event):
    assert client.get(f"/events/{event.id}/registrations", headers=auth(participant)).status_code == 403
