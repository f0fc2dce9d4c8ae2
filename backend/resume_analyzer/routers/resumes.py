"""
Resumes Router - upload/analyze, list and detail endpoints
"""
from typing import List
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from ..config import Settings
from ..schemas.resume import ResumeRecord, ResumeSummary
from ..services.analysis import ResumeAnalysisService

router = APIRouter(prefix="/api/resumes", tags=["Resumes"])


def get_analysis_service(request: Request) -> ResumeAnalysisService:
    return request.app.state.analysis_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post("/upload", response_model=ResumeRecord)
async def upload_resume(
    resume: UploadFile = File(...),
    service: ResumeAnalysisService = Depends(get_analysis_service),
    settings: Settings = Depends(get_app_settings),
):
    """Analyze an uploaded PDF resume and store the result."""
    if resume.content_type != settings.accepted_mime_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are allowed!"
        )

    # Read one byte past the limit so oversize uploads are detected without buffering them whole
    data = await resume.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB."
        )
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded"
        )

    result = await service.analyze(data, resume.filename or "resume.pdf")
    return result.unwrap()


@router.get("", response_model=List[ResumeSummary])
async def list_resumes(service: ResumeAnalysisService = Depends(get_analysis_service)):
    """All analyzed resumes, most recent first."""
    result = await service.list_summaries()
    return result.unwrap()


@router.get("/{resume_id}", response_model=ResumeRecord)
async def get_resume(resume_id: int, service: ResumeAnalysisService = Depends(get_analysis_service)):
    result = await service.get_record(resume_id)
    return result.unwrap()
