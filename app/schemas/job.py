from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

from app.models.job import ApplicationStatus


class CamelModel(BaseModel):
    """Base schema that reads/writes camelCase JSON keys"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True  # Allows conversion from SQLAlchemy models


class JobCreateRequest(CamelModel):
    """
    Schema for creating a job application.

    Fields are optional here so that missing values reach the service layer,
    which reports them with a single consistent message.
    """
    company_name: Optional[str] = None
    job_title: Optional[str] = None
    status: Optional[ApplicationStatus] = None


class JobUpdateRequest(CamelModel):
    """Schema for a partial update; only supplied fields change"""
    company_name: Optional[str] = None
    job_title: Optional[str] = None
    status: Optional[ApplicationStatus] = None


class JobResponse(CamelModel):
    """Schema for job application response"""
    id: int
    company_name: str
    job_title: str
    status: ApplicationStatus
    user_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class JobListResponse(CamelModel):
    """One page of job applications plus pagination metadata"""
    page: int
    limit: int
    total: int
    total_pages: int
    data: List[JobResponse]


class MessageResponse(BaseModel):
    message: str
