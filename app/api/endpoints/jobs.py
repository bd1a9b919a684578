from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.core.deps import get_current_user_id, get_job_service
from app.schemas.job import JobCreateRequest, JobListResponse, JobResponse, JobUpdateRequest, MessageResponse
from app.services.job_service import JobService

router = APIRouter(prefix="/jobs", tags=["Job Applications"])


@router.post("", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    user_id: int = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service)
):
    """
    Track a new job application for the current user.

    All of companyName, jobTitle and status are required. Status must be one
    of Applied, Interview, Rejected, Offer.
    """
    return job_service.create(user_id, request.company_name, request.job_title, request.status)


@router.get("", response_model=JobListResponse)
def list_jobs(
    page: int = 1,
    limit: int = 10,
    status: Optional[str] = None,
    company_name: Optional[str] = Query(None, alias="companyName"),
    job_title: Optional[str] = Query(None, alias="jobTitle"),
    user_id: int = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service)
):
    """
    List the current user's job applications, newest first.

    Args:
        page: Page number, starting at 1 (default: 1)
        limit: Records per page (default: 10, max: 100)
        status: Optional exact status filter (empty means no filter)
        companyName: Optional case-insensitive substring filter
        jobTitle: Optional case-insensitive substring filter
    """
    job_page = job_service.list(
        user_id,
        page=page,
        limit=limit,
        status=status,
        company_name=company_name,
        job_title=job_title
    )
    return JobListResponse.model_validate(job_page)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: str,
    user_id: int = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service)
):
    """
    Retrieve one of the current user's job applications by ID.

    Responds 403 if the job belongs to someone else, 404 if it does not exist.
    """
    return job_service.get_by_id(user_id, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    request: JobUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service)
):
    """
    Partially update a job application. Only the supplied fields change.
    """
    fields = request.model_dump(exclude_none=True)
    return job_service.update(user_id, job_id, fields)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: str,
    user_id: int = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service)
):
    """
    Permanently delete a job application.
    """
    message = job_service.delete(user_id, job_id)
    return MessageResponse(message=message)
