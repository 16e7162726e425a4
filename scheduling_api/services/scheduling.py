"""Appointment booking and monthly availability.

A create request moves through ``Received -> Validated -> ConflictChecked ->
Persisted`` and aborts with a ``SchedulingError`` at the first gate it fails.
The conflict check and the insert run in one transaction while holding the
booking lock, so two concurrent requests for overlapping slots cannot both
be accepted.
"""

import logging
from calendar import monthrange
from collections import defaultdict
from datetime import datetime
from enum import Enum
from threading import Lock

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scheduling_api.models.appointment import Appointment
from scheduling_api.services import appointment_store
from scheduling_api.services.errors import (
    INVALID_FORMAT,
    INVALID_TYPE,
    IN_PAST,
    SLOT_RESERVED,
    SchedulingError,
    persistence_failure,
)

logger = logging.getLogger(__name__)

SCHEDULED_FORMAT = '%Y-%m-%d %H:%M:%S'
CANONICAL_SCHEDULED = '%04d-%02d-%02d %02d:%02d:%02d'
DATE_FORMAT = '%04d-%02d-%02d'
HOUR_FORMAT = '%02d:00:00'
HOURS_PER_DAY = 24
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

_booking_lock = Lock()


class AppointmentType(str, Enum):
    VISIT = 'visit'
    CONSULTATION = 'consultation'
    FOLLOW_UP = 'follow'
    CHECKUP = 'checkup'

    @classmethod
    def parse(cls, raw: str | None) -> 'AppointmentType | None':
        """Return the matching member, ``None`` for an empty value.

        Raises ``SchedulingError(invalid_type)`` when nothing matches.
        """
        if raw is None:
            return None

        normalized = raw.strip().lower()
        if not normalized:
            return None

        for member in cls:
            if member.value == normalized:
                return member

        raise SchedulingError(INVALID_TYPE, f"The value '{raw}' is invalid.")


class SlotStatus(str, Enum):
    RESERVED = 'reserved'
    AVAILABLE = 'available'


class AppointmentHour(BaseModel):
    hour: str
    status: SlotStatus


class AppointmentDay(BaseModel):
    date: str
    hours: list[AppointmentHour]


def parse_scheduled(raw: str | None) -> datetime:
    if not isinstance(raw, str):
        raise SchedulingError(INVALID_FORMAT, 'Scheduled must use the format YYYY-MM-DD HH:MM:SS.')

    try:
        scheduled = datetime.strptime(raw, SCHEDULED_FORMAT)
    except ValueError as exc:
        raise SchedulingError(INVALID_FORMAT, 'Scheduled must use the format YYYY-MM-DD HH:MM:SS.') from exc

    # strptime accepts unpadded fields, so compare against the canonical form.
    if format_scheduled(scheduled) != raw:
        raise SchedulingError(INVALID_FORMAT, 'Scheduled must use the format YYYY-MM-DD HH:MM:SS.')

    return scheduled


def format_scheduled(scheduled: datetime) -> str:
    return CANONICAL_SCHEDULED % (
        scheduled.year,
        scheduled.month,
        scheduled.day,
        scheduled.hour,
        scheduled.minute,
        scheduled.second,
    )


def _lock_appointment_table(db: Session) -> None:
    if db.get_bind().dialect.name == 'postgresql':
        db.execute(text('LOCK TABLE medical_appointments IN SHARE ROW EXCLUSIVE MODE'))


def create_appointment(
    db: Session,
    *,
    name: str,
    email: str,
    phone: str | None,
    reason: str,
    scheduled_raw: str | None,
    type_raw: str | None,
    now: datetime | None = None,
) -> Appointment:
    scheduled = parse_scheduled(scheduled_raw)

    current_time = now or datetime.now()
    if scheduled < current_time:
        raise SchedulingError(IN_PAST, 'Scheduled in past')

    appointment_type = AppointmentType.parse(type_raw)

    with _booking_lock:
        try:
            _lock_appointment_table(db)
            reserved = appointment_store.has_overlap(db, scheduled)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception('Overlap check failed for %s', scheduled_raw)
            raise persistence_failure('Error checking availability.') from exc

        if reserved:
            db.rollback()
            logger.info('Rejected booking for %s: %s', scheduled_raw, SLOT_RESERVED)
            raise SchedulingError(SLOT_RESERVED, 'The selected time is already reserved.')

        try:
            appointment = appointment_store.insert(
                db,
                Appointment(
                    name=name,
                    email=email,
                    phone=phone or '',
                    reason=reason,
                    scheduled=scheduled,
                    type=appointment_type.value if appointment_type else None,
                ),
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception('Insert failed for appointment at %s', scheduled_raw)
            raise persistence_failure() from exc

    logger.info('Booked appointment %s at %s', appointment.id, scheduled_raw)
    return appointment


def list_appointments(
    db: Session,
    page: int | None = DEFAULT_PAGE,
    limit: int | None = DEFAULT_PAGE_LIMIT,
) -> list[Appointment]:
    page = DEFAULT_PAGE if page is None else page
    limit = DEFAULT_PAGE_LIMIT if limit is None else limit
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_LIMIT)
    return appointment_store.list_appointments(db, page=page, limit=limit)


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def calendar(db: Session, year: int, month: int) -> list[AppointmentDay]:
    days = days_in_month(year, month)
    month_start = datetime(year, month, 1, 0, 0, 0)
    month_end = datetime(year, month, days, 23, 59, 59)

    reserved: dict[int, set[int]] = defaultdict(set)
    for scheduled in appointment_store.list_scheduled_in_range(db, month_start, month_end):
        reserved[scheduled.day].add(scheduled.hour)

    return [
        AppointmentDay(
            date=DATE_FORMAT % (year, month, day),
            hours=[
                AppointmentHour(
                    hour=HOUR_FORMAT % hour,
                    status=SlotStatus.RESERVED if hour in reserved[day] else SlotStatus.AVAILABLE,
                )
                for hour in range(HOURS_PER_DAY)
            ],
        )
        for day in range(1, days + 1)
    ]
