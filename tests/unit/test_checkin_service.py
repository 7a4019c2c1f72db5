import uuid

import pytest

from eventdesk.db.repositories import registrations as registration_repo
from eventdesk.services.checkin_service import CheckInService
from eventdesk.services.errors import (
    AlreadyCheckedInError,
    CheckInError,
    InvalidQRCodeError,
    QRCodeAlreadyUsedError,
    QRCodeNotFoundError,
    WrongEventError,
)


@pytest.fixture
def registration(db, participant, event):
    return registration_repo.create_registration(db, user_id=participant.id, event_id=event.id)


def test_check_in_success(db, registration, participant, event, volunteer):
    result = CheckInService(db).check_in(registration.qr_code, event_id=event.id, scanned_by=volunteer.id)

    assert result.attendee.id == participant.id
    assert result.event.id == event.id
    assert result.registration.checked_in is True
    assert result.registration.qr_used is True
    assert result.registration.checked_in_at is not None
    assert result.registration.checked_in_by == volunteer.id


def test_check_in_strips_whitespace(db, registration):
    result = CheckInService(db).check_in(f"  {registration.qr_code}\n")
    assert result.registration.id == registration.id


@pytest.mark.parametrize("code", ["", "   ", None])
def test_empty_code_is_invalid(db, code):
    with pytest.raises(InvalidQRCodeError) as exc:
        CheckInService(db).check_in(code)
    assert exc.value.status_code == 422


def test_unknown_code(db):
    with pytest.raises(QRCodeNotFoundError) as exc:
        CheckInService(db).check_in("event-x-user-y-reg-z")
    assert exc.value.detail == "Invalid QR code. Please make sure you are registered for this event."
    assert exc.value.status_code == 404


def test_wrong_event(db, registration, make_event):
    other = make_event("Other")
    with pytest.raises(WrongEventError):
        CheckInService(db).check_in(registration.qr_code, event_id=other.id)
    db.refresh(registration)
    assert registration.checked_in is False


def test_second_scan_reports_used_code(db, registration):
    service = CheckInService(db)
    service.check_in(registration.qr_code)
    with pytest.raises(QRCodeAlreadyUsedError) as exc:
        service.check_in(registration.qr_code)
    assert exc.value.detail == (
        "This QR code has already been used. Each QR code can only be used once for security."
    )
    assert exc.value.reason == "qr_code_already_used"


def test_checked_in_without_used_flag_reports_already_checked_in(db, registration):
    registration.checked_in = True
    db.commit()
    with pytest.raises(AlreadyCheckedInError) as exc:
        CheckInService(db).check_in(registration.qr_code)
    assert exc.value.detail == "You are already checked in to this event."


def test_losing_a_concurrent_scan(db, registration, monkeypatch):
    """The conditional update lost: the other desk already flipped the code."""
    real_mark = registration_repo.mark_checked_in

    def _other_desk_wins(session, registration_id, **kwargs):
        real_mark(session, registration_id)
        return False

    monkeypatch.setattr(registration_repo, "mark_checked_in", _other_desk_wins)
    with pytest.raises(QRCodeAlreadyUsedError):
        CheckInService(db).check_in(registration.qr_code)


def test_all_errors_share_base_class():
    for cls in (InvalidQRCodeError, QRCodeNotFoundError, WrongEventError, QRCodeAlreadyUsedError, AlreadyCheckedInError):
        assert issubclass(cls, CheckInError)
    assert CheckInError("custom").detail == "custom"
    assert WrongEventError().reason == "wrong_event"


def test_module_level_check_in(db, registration):
    from eventdesk.services.checkin_service import check_in

    assert check_in(db, registration.qr_code).registration.qr_used is True
