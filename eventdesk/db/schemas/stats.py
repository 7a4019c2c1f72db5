import uuid
from datetime import datetime
from typing import List
from pydantic import BaseModel


class HourCount(BaseModel):
    hour: str
    count: int


class EventStats(BaseModel):
    event_id: uuid.UUID
    total_registered: int
    total_checked_in: int
    check_in_rate: float
    registrations_by_hour: List[HourCount]
    checkins_by_hour: List[HourCount]


class EventSummary(BaseModel):
    event_id: uuid.UUID
    name: str
    date: str
    location: str
    is_active: bool
    total_registered: int
    total_checked_in: int
    check_in_rate: float


class DashboardSummary(BaseModel):
    generated_at: datetime
    total_events: int
    total_registered: int
    total_checked_in: int
    events: List[EventSummary]
