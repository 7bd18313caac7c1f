from datetime import datetime, UTC
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from todo_api.database import Base


def _now():
    return datetime.now(UTC)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=_now)

    # deleting a user removes their tasks; the FK carries ON DELETE CASCADE as well
    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
