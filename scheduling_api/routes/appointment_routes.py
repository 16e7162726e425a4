from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, field_validator
from pydantic.networks import validate_email
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scheduling_api.database import ensure_appointment_schema, get_db
from scheduling_api.services import appointment_store, scheduling
from scheduling_api.services.errors import INVALID_YEAR, SchedulingError, ServiceError, persistence_failure
from scheduling_api.services.scheduling import AppointmentDay

router = APIRouter(tags=['appointments'])

MAX_NAME_LENGTH = 100


class CreateAppointmentRequest(BaseModel):
    name: str
    email: str
    phone: str | None = None
    reason: str
    scheduled: str
    type: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        if len(normalized) > MAX_NAME_LENGTH:
            raise ValueError(f'Name must be {MAX_NAME_LENGTH} characters or fewer.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        normalized = value.strip()
        validate_email(normalized)
        return normalized

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip()

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Reason is required.')
        return normalized


class AppointmentResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    reason: str
    scheduled: str
    type: str | None = None

    class Config:
        from_attributes = True

    @field_validator('scheduled', mode='before')
    @classmethod
    def format_scheduled(cls, value: datetime | str) -> str:
        if isinstance(value, datetime):
            return scheduling.format_scheduled(value)
        return value


def ensure_database_ready() -> None:
    try:
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable. Verify DATABASE_URL.',
        ) from exc


@router.post('/appointments', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(data: CreateAppointmentRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        appointment = scheduling.create_appointment(
            db,
            name=data.name,
            email=data.email,
            phone=data.phone,
            reason=data.reason,
            scheduled_raw=data.scheduled,
            type_raw=data.type,
        )
    except ServiceError as exc:
        raise exc.to_http() from exc

    return AppointmentResponse.model_validate(appointment)


@router.get('/appointments', response_model=list[AppointmentResponse])
def list_appointments(
    response: Response,
    page: int = Query(default=scheduling.DEFAULT_PAGE, ge=1),
    limit: int = Query(default=scheduling.DEFAULT_PAGE_LIMIT),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        appointments = scheduling.list_appointments(db, page=page, limit=limit)
        response.headers['X-Total-Count'] = str(appointment_store.count_appointments(db))
    except SQLAlchemyError as exc:
        db.rollback()
        raise persistence_failure('Error reading appointments.').to_http() from exc

    return [AppointmentResponse.model_validate(appointment) for appointment in appointments]


@router.get('/calendar', response_model=list[AppointmentDay])
def calendar_appointments(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    today = date.today()
    month = month or today.month
    year = year or today.year

    if year > today.year:
        raise SchedulingError(INVALID_YEAR, f'Year must be {today.year} or earlier.').to_http()

    ensure_database_ready()

    try:
        return scheduling.calendar(db, year=year, month=month)
    except SQLAlchemyError as exc:
        db.rollback()
        raise persistence_failure('Error reading the calendar.').to_http() from exc
