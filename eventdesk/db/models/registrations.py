import uuid
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Index, UniqueConstraint, CheckConstraint, Uuid
from .base import Base, now_utc


class Registration(Base):
    __tablename__ = 'registrations'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    event_id = Column(Uuid, ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    qr_code = Column(String, nullable=False, unique=True)
    registered_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    checked_in = Column(Boolean, nullable=False, default=False)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    checked_in_by = Column(Uuid, ForeignKey('users.id'), nullable=True)
    # One-time use: flips to true on the first successful scan and never back.
    qr_used = Column(Boolean, nullable=False, default=False)
    # pending|sent|failed|skipped
    confirmation_email_status = Column(String, nullable=False, default='pending')

    __table_args__ = (
        UniqueConstraint('user_id', 'event_id', name='uq_registrations_user_event'),
        Index('ix_registrations_event_id', 'event_id'),
        Index('ix_registrations_event_id_checked_in', 'event_id', 'checked_in'),
        CheckConstraint(
            "confirmation_email_status in ('pending','sent','failed','skipped')",
            name='ck_registrations_email_status',
        ),
    )
