"""
Dependency injection for FastAPI.
"""
from typing import Annotated, Optional
from fastapi import Depends

from app.config import settings
from app.infrastructure.field_data_client import get_field_data_client
from app.infrastructure.plot_repository import InMemoryPlotRepository, PlotRepository
from app.services.domain.area_curve_fitter import AreaCurveFitter
from app.services.domain.diversity_calculator import DiversityCalculator
from app.services.domain.species_area_sampler import SpeciesAreaSampler
from app.services.application.analysis_service import AnalysisService
from app.services.application.survey_service import SurveyService


_memory_repository: Optional[InMemoryPlotRepository] = None


def get_plot_repository() -> PlotRepository:
    """
    Dependency factory for the configured plot repository.

    Returns:
        Remote field-data client or the process-wide in-memory store
    """
    global _memory_repository
    if settings.plot_store_backend == "remote":
        return get_field_data_client()
    if _memory_repository is None:
        _memory_repository = InMemoryPlotRepository()
    return _memory_repository


def get_diversity_calculator() -> DiversityCalculator:
    return DiversityCalculator()


def get_area_curve_fitter() -> AreaCurveFitter:
    return AreaCurveFitter()


def get_analysis_service(
    repository: Annotated[PlotRepository, Depends(get_plot_repository)],
    calculator: Annotated[DiversityCalculator, Depends(get_diversity_calculator)],
    fitter: Annotated[AreaCurveFitter, Depends(get_area_curve_fitter)],
) -> AnalysisService:
    """
    Dependency factory for AnalysisService.

    Args:
        repository: Plot storage (injected)
        calculator: Diversity calculator (injected)
        fitter: Species-area fitter (injected)

    Returns:
        AnalysisService instance
    """
    return AnalysisService(
        repository=repository,
        calculator=calculator,
        fitter=fitter,
        sampler=SpeciesAreaSampler(),
    )


def get_survey_service(
    repository: Annotated[PlotRepository, Depends(get_plot_repository)],
) -> SurveyService:
    return SurveyService(repository=repository)


# Type aliases for cleaner route signatures
AnalysisServiceDep = Annotated[AnalysisService, Depends(get_analysis_service)]
SurveyServiceDep = Annotated[SurveyService, Depends(get_survey_service)]
DiversityCalculatorDep = Annotated[DiversityCalculator, Depends(get_diversity_calculator)]
AreaCurveFitterDep = Annotated[AreaCurveFitter, Depends(get_area_curve_fitter)]
