"""
API router for projects and project-level statistics.
"""
from fastapi import APIRouter, HTTPException, Path, status
from typing import Annotated

from app.api.dependencies import AnalysisServiceDep, SurveyServiceDep
from app.api.v1.routers.common import NOT_FOUND, RATE_LIMITED, SERVER_ERROR
from app.domain.models import Project
from app.infrastructure.plot_repository import RecordNotFoundError
from app.services.application.analysis_service import ProjectDiversitySummary


router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


@router.post(
    "",
    response_model=Project,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    description="""
    Group plots under a named project. Plot IDs are not checked on
    creation; IDs without a stored plot are skipped by project statistics.
    """,
    responses={**RATE_LIMITED, **SERVER_ERROR},
)
async def create_project(
    project: Project,
    survey_service: SurveyServiceDep,
) -> Project:
    return await survey_service.create_project(project)


@router.get(
    "/{project_id}/diversity",
    response_model=ProjectDiversitySummary,
    summary="Get project diversity summary",
    description="""
    Compute diversity indices for every plot in a project together with
    their project-wide averages.
    """,
    responses={**NOT_FOUND, **RATE_LIMITED, **SERVER_ERROR},
)
async def get_project_diversity(
    project_id: Annotated[int, Path(description="Unique identifier for the project")],
    analysis_service: AnalysisServiceDep,
) -> ProjectDiversitySummary:
    """
    Get averaged diversity indices for a project.

    Raises:
        HTTPException: If the project is not found
    """
    try:
        return await analysis_service.get_project_diversity(project_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
