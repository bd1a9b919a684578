"""
CRUD operations for JobApplication model.

Implements the Repository pattern to encapsulate all database operations
for job applications. Ownership and input rules live in the service layer;
these functions only talk to the database.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Query, Session
from app.models.job import ApplicationStatus, JobApplication


def create(
    db: Session,
    user_id: int,
    company_name: str,
    job_title: str,
    status: ApplicationStatus
) -> JobApplication:
    """
    Create a new job application in the database.

    Returns:
        Created JobApplication instance with id and created_at populated
    """
    db_job = JobApplication(
        company_name=company_name,
        job_title=job_title,
        status=status,
        user_id=user_id,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: int) -> Optional[JobApplication]:
    """
    Retrieve a job application by its ID, regardless of owner.

    Returns:
        JobApplication instance if found, None otherwise
    """
    return db.query(JobApplication).filter(JobApplication.id == job_id).first()


def _filtered_query(
    db: Session,
    user_id: int,
    status: Optional[ApplicationStatus] = None,
    company_name: Optional[str] = None,
    job_title: Optional[str] = None
) -> Query:
    query = db.query(JobApplication).filter(JobApplication.user_id == user_id)

    if status:
        query = query.filter(JobApplication.status == status)

    # Case-insensitive substring match; % and _ in the term are matched literally
    if company_name:
        query = query.filter(JobApplication.company_name.icontains(company_name, autoescape=True))
    if job_title:
        query = query.filter(JobApplication.job_title.icontains(job_title, autoescape=True))

    return query


def get_multi_for_user(
    db: Session,
    user_id: int,
    skip: int = 0,
    limit: int = 10,
    status: Optional[ApplicationStatus] = None,
    company_name: Optional[str] = None,
    job_title: Optional[str] = None
) -> List[JobApplication]:
    """
    Retrieve one user's job applications, newest first, with pagination and filtering.

    Args:
        db: Database session
        user_id: Owner whose applications are listed
        skip: Number of records to skip (offset)
        limit: Maximum number of records to return
        status: Optional exact status filter
        company_name: Optional case-insensitive substring filter
        job_title: Optional case-insensitive substring filter

    Returns:
        List of JobApplication instances
    """
    query = _filtered_query(db, user_id, status, company_name, job_title)

    return (
        query.order_by(JobApplication.created_at.desc(), JobApplication.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_for_user(
    db: Session,
    user_id: int,
    status: Optional[ApplicationStatus] = None,
    company_name: Optional[str] = None,
    job_title: Optional[str] = None
) -> int:
    """Count one user's job applications matching the same filters as get_multi_for_user."""
    return _filtered_query(db, user_id, status, company_name, job_title).count()


def update(db: Session, job: JobApplication, fields: Dict[str, Any]) -> JobApplication:
    """
    Apply a set of already-validated field changes to a job application.

    Returns:
        The refreshed JobApplication instance
    """
    for name, value in fields.items():
        setattr(job, name, value)

    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, job: JobApplication) -> None:
    """Permanently delete a job application."""
    db.delete(job)
    db.commit()
