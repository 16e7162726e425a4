"""Option model definitions."""

from sqlalchemy import Column, String, Text
from scheduling_api.database import Base


class Option(Base):
    """Named site option holding a JSON encoded value."""
    __tablename__ = "options"

    name = Column(String(191), primary_key=True)
    value = Column(Text, nullable=False)
