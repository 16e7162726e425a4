"""Appointment model definitions."""

from sqlalchemy import Column, Integer, DateTime, String, Text
from scheduling_api.database import Base


class Appointment(Base):
    """Represents a booked one-hour medical appointment."""
    __tablename__ = "medical_appointments"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(100), nullable=False, default="")
    reason = Column(Text, nullable=False)
    scheduled = Column(DateTime, nullable=False, index=True)
    type = Column(String(100), nullable=True)
