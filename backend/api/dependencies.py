"""Shared dependencies for API routes."""

from services.analysis_store import AnalysisStore, get_analysis_store
from services.resume_analyzer import AnalysisOrchestrator
from services.resume_analyzer import get_orchestrator as _get_orchestrator


def get_orchestrator() -> AnalysisOrchestrator:
    return _get_orchestrator()


def get_store() -> AnalysisStore:
    return get_analysis_store()
