"""
Job application management.

Validates input, enforces per-user ownership and runs CRUD and filtered,
paginated listing against the job store. Every read or write of a single
record goes through the same existence-then-ownership check.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenError, InternalError, NotFoundError, ValidationError
from app.crud import job as job_crud
from app.models.job import ApplicationStatus, JobApplication

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

# Largest value a PostgreSQL INTEGER primary key can hold
MAX_JOB_ID = 2**31 - 1

UPDATABLE_FIELDS = ("company_name", "job_title", "status")

_FIELD_LABELS = {
    "company_name": "companyName",
    "job_title": "jobTitle",
    "status": "status",
}


@dataclass
class JobPage:
    """One page of a user's job applications plus pagination metadata."""
    page: int
    limit: int
    total: int
    total_pages: int
    data: List[JobApplication]


def parse_status(value: Union[str, ApplicationStatus]) -> ApplicationStatus:
    """Convert a raw status value to ApplicationStatus, or raise ValidationError."""
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise ValidationError("Invalid status value")


def parse_job_id(job_id: Any) -> int:
    """Accept an int or a numeric string naming a job id."""
    if isinstance(job_id, bool):
        raise ValidationError("Invalid job ID")
    try:
        parsed = int(job_id)
    except (TypeError, ValueError):
        raise ValidationError("Invalid job ID")

    if parsed < 1 or parsed > MAX_JOB_ID:
        raise ValidationError("Invalid job ID")
    return parsed


def _is_blank(value: Optional[str]) -> bool:
    return not isinstance(value, str) or not value.strip()


def _positive_int(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{label} must be a positive integer")
    return value


class JobService:
    """Job application operations bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def _store_failure(self, action: str) -> InternalError:
        """Roll back, log the active database exception and build the caller-facing error."""
        self.db.rollback()
        logger.exception(f"Database error while {action}")
        return InternalError()

    def _get_owned(self, user_id: int, job_id: Any) -> JobApplication:
        job_id = parse_job_id(job_id)

        try:
            job = job_crud.get_by_id(self.db, job_id)
        except SQLAlchemyError:
            raise self._store_failure(f"loading job {job_id}")

        if job is None:
            raise NotFoundError("Job not found")

        if job.user_id != user_id:
            logger.warning(f"User {user_id} denied access to job {job_id}")
            raise ForbiddenError("Access denied")

        return job

    def create(
        self,
        user_id: int,
        company_name: Optional[str],
        job_title: Optional[str],
        status: Optional[Union[str, ApplicationStatus]]
    ) -> JobApplication:
        """
        Create a job application owned by user_id.

        Raises:
            ValidationError: If a field is missing or blank, or status is not allowed
        """
        if _is_blank(company_name) or _is_blank(job_title) or not status:
            raise ValidationError("companyName, jobTitle, and status are required")

        status = parse_status(status)

        try:
            job = job_crud.create(self.db, user_id, company_name, job_title, status)
        except SQLAlchemyError:
            raise self._store_failure("creating job")

        logger.info(f"User {user_id} created job {job.id}: {job.company_name} / {job.job_title}")
        return job

    def list(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 10,
        status: Optional[Union[str, ApplicationStatus]] = None,
        company_name: Optional[str] = None,
        job_title: Optional[str] = None
    ) -> JobPage:
        """
        List user_id's job applications, newest first.

        limit is clamped to MAX_PAGE_SIZE; the effective value is reported back
        in the page. company_name and job_title are case-insensitive substring
        filters.

        Raises:
            ValidationError: If page or limit is not a positive integer,
                or status is not allowed
        """
        page = _positive_int(page, "Page")
        limit = min(_positive_int(limit, "Limit"), MAX_PAGE_SIZE)
        status_filter = parse_status(status) if status else None

        filters = dict(
            status=status_filter,
            company_name=company_name or None,
            job_title=job_title or None,
        )

        skip = (page - 1) * limit

        try:
            total = job_crud.count_for_user(self.db, user_id, **filters)
            # Pages past the last match are empty; skipping the query also keeps
            # arbitrarily large offsets away from the database
            jobs = []
            if skip < total:
                jobs = job_crud.get_multi_for_user(
                    self.db,
                    user_id,
                    skip=skip,
                    limit=limit,
                    **filters
                )
        except SQLAlchemyError:
            raise self._store_failure("listing jobs")

        return JobPage(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
            data=jobs,
        )

    def get_by_id(self, user_id: int, job_id: Any) -> JobApplication:
        """
        Raises:
            ValidationError: If job_id is not a valid identifier
            NotFoundError: If the job does not exist
            ForbiddenError: If the job belongs to another user
        """
        return self._get_owned(user_id, job_id)

    def update(self, user_id: int, job_id: Any, fields: Dict[str, Any]) -> JobApplication:
        """
        Partially update a job application.

        Only company_name, job_title and status are recognized; keys with a
        None value are treated as not supplied.

        Raises:
            ValidationError: If nothing recognized is supplied, a text field is
                blank, or status is not allowed
            NotFoundError / ForbiddenError: As for get_by_id
        """
        changes = {
            name: fields[name]
            for name in UPDATABLE_FIELDS
            if fields.get(name) is not None
        }

        job = self._get_owned(user_id, job_id)
        job_id = job.id

        if not changes:
            raise ValidationError("Nothing to update")

        for name in ("company_name", "job_title"):
            if name in changes and _is_blank(changes[name]):
                raise ValidationError(f"{_FIELD_LABELS[name]} cannot be empty")

        if "status" in changes:
            changes["status"] = parse_status(changes["status"])

        try:
            job = job_crud.update(self.db, job, changes)
        except SQLAlchemyError:
            raise self._store_failure(f"updating job {job_id}")

        logger.info(f"User {user_id} updated job {job_id}: {', '.join(_FIELD_LABELS[n] for n in changes)}")
        return job

    def delete(self, user_id: int, job_id: Any) -> str:
        """
        Permanently delete a job application.

        Returns:
            Confirmation message

        Raises:
            ValidationError / NotFoundError / ForbiddenError: As for get_by_id
        """
        job = self._get_owned(user_id, job_id)
        deleted_id = job.id

        try:
            job_crud.delete(self.db, job)
        except SQLAlchemyError:
            raise self._store_failure(f"deleting job {deleted_id}")

        logger.info(f"User {user_id} deleted job {deleted_id}")
        return "Job deleted successfully"
