"""Post model definitions."""

from sqlalchemy import Column, Integer, String
from scheduling_api.database import Base


class Post(Base):
    """Represents a published post with its like and visit counters."""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, default="")
    thumbnail = Column(String, nullable=False, default="")
    url = Column(String, nullable=False, default="")
    likes = Column(Integer, nullable=False, default=0)
    visits = Column(Integer, nullable=False, default=0, index=True)
