"""
API router for the species registry.
"""
from fastapi import APIRouter

from app.api.dependencies import SurveyServiceDep
from app.api.v1.routers.common import RATE_LIMITED, SERVER_ERROR
from app.domain.models import Species


router = APIRouter(
    prefix="/species",
    tags=["species"],
)


@router.get(
    "",
    response_model=list[Species],
    summary="List species",
    description="Species that plot measurements refer to by speciesId.",
    responses={**RATE_LIMITED, **SERVER_ERROR},
)
async def list_species(survey_service: SurveyServiceDep) -> list[Species]:
    return await survey_service.list_species()
