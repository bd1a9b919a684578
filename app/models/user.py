"""
User model for authentication.

Each User owns zero or more job applications. Users are created on
registration and never modified afterwards.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base


class User(Base):
    """
    User account.

    The email is stored exactly as registered; lookups are case-sensitive.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Authentication credentials
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    job_applications = relationship("JobApplication", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
