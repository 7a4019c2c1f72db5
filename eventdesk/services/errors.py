"""
Domain exceptions raised by services.

Each carries the HTTP status and the user-facing message the API returns, so
routers translate them without re-deciding codes.
"""
from __future__ import annotations


class ServiceError(Exception):
    status_code: int = 400
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class EventNotFoundError(ServiceError):
    status_code = 404
    default_detail = "Event not found"


class RegistrationError(ServiceError):
    status_code = 422
    default_detail = "Registration failed. Please try again."


class RegistrationClosedError(RegistrationError):
    status_code = 409
    default_detail = "This event is not accepting registrations"


class DuplicateRegistrationError(RegistrationError):
    status_code = 409
    default_detail = "You are already registered for this event."


class CheckInError(ServiceError):
    status_code = 400
    default_detail = "Failed to process check-in. Please try again."
    reason: str = "checkin_failed"


class InvalidQRCodeError(CheckInError):
    status_code = 422
    default_detail = "A QR code value is required."
    reason = "invalid_qr_code"


class QRCodeNotFoundError(CheckInError):
    status_code = 404
    default_detail = "Invalid QR code. Please make sure you are registered for this event."
    reason = "qr_code_not_found"


class WrongEventError(CheckInError):
    status_code = 409
    default_detail = "This QR code belongs to a different event."
    reason = "wrong_event"


class QRCodeAlreadyUsedError(CheckInError):
    status_code = 409
    default_detail = "This QR code has already been used. Each QR code can only be used once for security."
    reason = "qr_code_already_used"


class AlreadyCheckedInError(CheckInError):
    status_code = 409
    default_detail = "You are already checked in to this event."
    reason = "already_checked_in"
