import uuid
from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, Index, Uuid
from .base import Base, now_utc


class Event(Base):
    __tablename__ = 'events'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default='')
    # Date as entered by the organizer (e.g. '2025-03-14'); not interpreted.
    date = Column(String, nullable=False, default='')
    location = Column(String, nullable=False, default='')
    organizer_id = Column(Uuid, ForeignKey('users.id'), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('ix_events_organizer_id', 'organizer_id'),
        Index('ix_events_is_active', 'is_active'),
    )
