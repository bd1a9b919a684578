import enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base


class ApplicationStatus(str, enum.Enum):
    """
    Stage of a job application.

    - APPLIED: Application submitted
    - INTERVIEW: Interviewing with the company
    - REJECTED: Application turned down
    - OFFER: Offer received
    """
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    REJECTED = "Rejected"
    OFFER = "Offer"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobApplication(Base):
    """
    A job application tracked by a single owning user.

    Ownership is checked by the service layer against user_id; the foreign
    key only guarantees the owner exists.
    """
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String, nullable=False, index=True)
    job_title = Column(String, nullable=False, index=True)
    status = Column(
        Enum(
            ApplicationStatus,
            name="applicationstatus",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        index=True,
    )

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Python-side defaults keep sub-second precision for newest-first ordering
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=_utcnow)

    # Relationships
    user = relationship("User", back_populates="job_applications")

    def __repr__(self):
        return f"<JobApplication(id={self.id}, company='{self.company_name}', status={self.status.value})>"
