import uuid
from sqlalchemy import Column, String, DateTime, Uuid, CheckConstraint
from .base import Base, now_utc


class User(Base):
    __tablename__ = 'users'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    phone = Column(String, nullable=True)
    # Plaintext role flag: 'organizer'|'volunteer'|'participant'
    role = Column(String, nullable=False, default='participant')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        CheckConstraint("role in ('organizer','volunteer','participant')", name='ck_users_role'),
    )
