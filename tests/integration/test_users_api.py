def test_get_me_lists_event_ids(client, auth, participant, organizer, make_event):
    own = make_event("Organized")
    other = make_event("Attended")
    client.post(
        "/registrations",
        json={"name": "Olivia", "email": organizer.email, "phone": "555", "event_id": str(other.id)},
        headers=auth(organizer),
    )
    body = client.get("/users/me", headers=auth(organizer)).json()
    assert set(body["event_ids"]) == {str(own.id), str(other.id)}


def test_update_me(client, auth, participant):
    resp = client.patch("/users/me", json={"name": "  Paula P. ", "phone": "555-0111"}, headers=auth(participant))
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Paula P."
    assert body["phone"] == "555-0111"
    assert body["role"] == "participant"


def test_update_me_rejects_blank_name(client, auth, participant):
    resp = client.patch("/users/me", json={"name": "   "}, headers=auth(participant))
    assert resp.status_code == 422


def test_my_registrations(client, auth, participant, make_event):
    first = make_event("First")
    second = make_event("Second")
    for ev in (first, second):
        client.post(
            "/registrations",
            json={"name": "Paula", "email": participant.email, "phone": "555", "event_id": str(ev.id)},
            headers=auth(participant),
        )
    regs = client.get("/users/me/registrations", headers=auth(participant)).json()
    assert {r["event_id"] for r in regs} == {str(first.id), str(second.id)}
