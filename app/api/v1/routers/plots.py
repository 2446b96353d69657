"""
API router for vegetation plots and their analyses.
"""
from fastapi import APIRouter, HTTPException, Path, status
from fastapi.responses import Response
from typing import Annotated

from app.api.dependencies import AnalysisServiceDep, SurveyServiceDep
from app.api.v1.routers.common import NOT_FOUND, RATE_LIMITED, SERVER_ERROR
from app.domain.models import DiversityIndices, VegetationPlot
from app.infrastructure.plot_repository import PlotNotFoundError
from app.services.application.analysis_service import SpeciesAreaCurve


router = APIRouter(
    prefix="/plots",
    tags=["plots"],
)

PlotId = Annotated[int, Path(description="Unique identifier for the plot")]


@router.post(
    "",
    response_model=VegetationPlot,
    status_code=status.HTTP_201_CREATED,
    summary="Record a vegetation plot",
    description="""
    Store a surveyed plot with its species measurements. The plot ID is
    assigned by the server; any ID in the request body is ignored.
    """,
    responses={**RATE_LIMITED, **SERVER_ERROR},
)
async def create_plot(
    plot: VegetationPlot,
    survey_service: SurveyServiceDep,
) -> VegetationPlot:
    return await survey_service.create_plot(plot)


@router.get(
    "",
    response_model=list[VegetationPlot],
    summary="List vegetation plots",
    responses={**RATE_LIMITED, **SERVER_ERROR},
)
async def list_plots(survey_service: SurveyServiceDep) -> list[VegetationPlot]:
    return await survey_service.list_plots()


@router.get(
    "/export.csv",
    response_class=Response,
    summary="Export plot diversity summary",
    description="One CSV row per plot with its location and diversity indices.",
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV document"},
        **RATE_LIMITED,
        **SERVER_ERROR,
    },
)
async def export_plot_summary(analysis_service: AnalysisServiceDep) -> Response:
    content = await analysis_service.export_plot_summary_csv()
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="plot_diversity.csv"'},
    )


@router.get(
    "/{plot_id}/diversity",
    response_model=DiversityIndices,
    summary="Get plot diversity indices",
    responses={**NOT_FOUND, **RATE_LIMITED, **SERVER_ERROR},
)
async def get_plot_diversity(
    plot_id: PlotId,
    analysis_service: AnalysisServiceDep,
) -> DiversityIndices:
    """
    Compute diversity indices from a stored plot's measurements.

    Raises:
        HTTPException: If the plot is not found
    """
    try:
        return await analysis_service.get_plot_diversity(plot_id)
    except PlotNotFoundError:
        raise HTTPException(status_code=404, detail=f"Plot with ID '{plot_id}' not found")


@router.get(
    "/{plot_id}/species-area",
    response_model=SpeciesAreaCurve,
    summary="Get plot species-area curve",
    description="""
    Derive nested-area species counts for a stored plot and fit the
    species-area power law S = c * A^z.
    """,
    responses={**NOT_FOUND, **RATE_LIMITED, **SERVER_ERROR},
)
async def get_species_area_curve(
    plot_id: PlotId,
    analysis_service: AnalysisServiceDep,
) -> SpeciesAreaCurve:
    try:
        return await analysis_service.get_species_area_curve(plot_id)
    except PlotNotFoundError:
        raise HTTPException(status_code=404, detail=f"Plot with ID '{plot_id}' not found")
