"""
Database models package.
"""

from app.models.job import JobApplication, ApplicationStatus
from app.models.user import User

__all__ = ["JobApplication", "ApplicationStatus", "User"]
