import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_orchestrator, get_store
from config import settings
from models.requests import AnalyzeRequest
from models.responses import AnalysisResult, ErrorResponse, HealthResponse
from services.analysis_store import AnalysisStore
from services.inference_client import get_remote_inference
from services.resume_analyzer import AnalysisOrchestrator

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

SESSION_MAX_AGE = settings.session_ttl_hours * 3600


def _session_key(request: Request) -> str | None:
    return request.cookies.get(settings.session_cookie_name)


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        remote_configured=get_remote_inference().configured,
        generation_backend=settings.generation_backend,
    )


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def analyze(
    request: Request,
    response: Response,
    body: AnalyzeRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    session_key = _session_key(request) or uuid.uuid4().hex
    result = await orchestrator.analyze(body.resume_text, body.job_description_text, session_key)
    response.set_cookie(
        settings.session_cookie_name,
        session_key,
        max_age=SESSION_MAX_AGE,
        httponly=True,
        samesite="strict",
        secure=settings.session_cookie_secure,
    )
    return result


@router.get(
    "/analyze",
    response_model=AnalysisResult,
    responses={404: {"model": ErrorResponse}},
)
async def get_analysis(request: Request, store: AnalysisStore = Depends(get_store)):
    session_key = _session_key(request)
    result = store.get(session_key) if session_key else None
    if result is None:
        raise HTTPException(status_code=404, detail="No analysis found for this session")
    return result
