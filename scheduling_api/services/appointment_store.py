"""Persistence queries for appointments.

The store never commits: callers own the transaction so a conflict check and
the insert that follows it can share one.
"""

from datetime import datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from scheduling_api.models.appointment import Appointment

SLOT_DURATION = timedelta(hours=1)


def insert(db: Session, appointment: Appointment) -> Appointment:
    db.add(appointment)
    db.flush()
    db.refresh(appointment)
    return appointment


def has_overlap(db: Session, start: datetime) -> bool:
    # existing.scheduled < start + 1h AND existing.scheduled + 1h > start
    window_end = start + SLOT_DURATION
    window_start = start - SLOT_DURATION
    overlapping = db.query(Appointment.id).filter(
        Appointment.scheduled < window_end,
        Appointment.scheduled > window_start,
    ).first()
    return overlapping is not None


def list_appointments(db: Session, page: int, limit: int) -> list[Appointment]:
    offset = (page - 1) * limit
    return db.query(Appointment).order_by(
        Appointment.scheduled.asc(),
        Appointment.id.asc(),
    ).offset(offset).limit(limit).all()


def count_appointments(db: Session) -> int:
    return db.query(func.count(Appointment.id)).scalar() or 0


def list_scheduled_in_range(db: Session, start: datetime, end: datetime) -> list[datetime]:
    rows = db.query(Appointment.scheduled).filter(
        Appointment.scheduled >= start,
        Appointment.scheduled <= end,
    ).order_by(Appointment.scheduled.asc()).all()
    return [scheduled for (scheduled,) in rows]
