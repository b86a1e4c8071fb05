"""Listings and applications — plain create / read / status-update endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.clock import UtcDatetime
from jobportal.database.engine import get_session
from jobportal.database.repository import (
    ApplicationRepository,
    InternshipRepository,
    JobRepository,
)
from jobportal.errors import NotFoundError, UsageError
from jobportal.models.listing import ApplicationStatus

router = APIRouter(prefix="/api", tags=["listings"])


# Wire keys follow the portal frontend (``aboutCompany``, ``CTC`` ...);
# snake_case field names are accepted as well.
class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ── Jobs ─────────────────────────────────────────────────

class JobIn(_Wire):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    experience: str | None = Field(None, alias="Experience")
    category: str | None = None
    about_company: str | None = Field(None, alias="aboutCompany")
    about_job: str | None = Field(None, alias="aboutJob")
    who_can_apply: str | None = Field(None, alias="Whocanapply")
    perks: list[Any] = Field(default_factory=list)
    additional_info: str | None = Field(None, alias="AdditionalInfo")
    ctc: str | None = Field(None, alias="CTC")
    start_date: str | None = Field(None, alias="StartDate")


class JobOut(JobIn):
    id: str
    created_at: UtcDatetime = Field(alias="createdAt")


# ── Internships ──────────────────────────────────────────

class InternshipIn(_Wire):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    duration: str | None = Field(None, alias="Duration")
    category: str | None = None
    about_company: str | None = Field(None, alias="aboutCompany")
    about_internship: str | None = Field(None, alias="aboutInternship")
    who_can_apply: str | None = Field(None, alias="Whocanapply")
    perks: list[Any] = Field(default_factory=list)
    additional_info: str | None = Field(None, alias="AdditionalInfo")
    stipend: str | None = None
    start_date: str | None = Field(None, alias="StartDate")


class InternshipOut(InternshipIn):
    id: str
    created_at: UtcDatetime = Field(alias="createdAt")


# ── Applications ─────────────────────────────────────────

class ApplicationIn(_Wire):
    cover_letter: str | None = Field(None, alias="coverLetter")
    user: dict[str, Any] | None = None
    company: str | None = None
    category: str | None = None
    body: str | None = None
    application_id: str | None = Field(None, alias="ApplicationId")


class ApplicationOut(ApplicationIn):
    id: str
    status: str
    created_at: UtcDatetime = Field(alias="createdAt")


class StatusUpdate(BaseModel):
    status: str


# ── Endpoints ────────────────────────────────────────────

@router.post("/jobs", response_model=JobOut)
async def create_job(body: JobIn, session: AsyncSession = Depends(get_session)):
    return await JobRepository(session).create(body.model_dump())


@router.get("/jobs", response_model=list[JobOut])
async def list_jobs(session: AsyncSession = Depends(get_session)):
    return await JobRepository(session).list_all()


@router.get("/jobs/{job_id}", response_model=JobOut)
async def get_job(job_id: str, session: AsyncSession = Depends(get_session)):
    job = await JobRepository(session).get(job_id)
    if job is None:
        raise NotFoundError("Job not found")
    return job


@router.post("/internship", response_model=InternshipOut)
async def create_internship(body: InternshipIn, session: AsyncSession = Depends(get_session)):
    return await InternshipRepository(session).create(body.model_dump())


@router.get("/internship", response_model=list[InternshipOut])
async def list_internships(session: AsyncSession = Depends(get_session)):
    return await InternshipRepository(session).list_all()


@router.get("/internship/{internship_id}", response_model=InternshipOut)
async def get_internship(internship_id: str, session: AsyncSession = Depends(get_session)):
    internship = await InternshipRepository(session).get(internship_id)
    if internship is None:
        raise NotFoundError("Internship not found")
    return internship


@router.post("/application", response_model=ApplicationOut)
async def create_application(body: ApplicationIn, session: AsyncSession = Depends(get_session)):
    return await ApplicationRepository(session).create(body.model_dump())


@router.get("/application", response_model=list[ApplicationOut])
async def list_applications(session: AsyncSession = Depends(get_session)):
    return await ApplicationRepository(session).list_all()


@router.get("/application/{application_id}", response_model=ApplicationOut)
async def get_application(application_id: str, session: AsyncSession = Depends(get_session)):
    application = await ApplicationRepository(session).get(application_id)
    if application is None:
        raise NotFoundError("Application not found")
    return application


@router.put("/application/{application_id}", response_model=ApplicationOut)
async def update_application_status(
    application_id: str, body: StatusUpdate, session: AsyncSession = Depends(get_session)
):
    """Set an application's status; only pending, accepted or rejected are accepted."""
    try:
        status = ApplicationStatus(body.status)
    except ValueError:
        raise UsageError("Invalid status") from None

    application = await ApplicationRepository(session).update_status(application_id, status)
    if application is None:
        raise NotFoundError("Application not found")
    return application
