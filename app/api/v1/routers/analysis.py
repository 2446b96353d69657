"""
API router for ad-hoc analyses on caller-supplied data.
"""
from fastapi import APIRouter

from app.api.dependencies import AreaCurveFitterDep, DiversityCalculatorDep
from app.api.v1.models.responses import DiversityRequest, SpeciesAreaRequest
from app.api.v1.routers.common import RATE_LIMITED
from app.domain.models import DiversityIndices, PowerLawFit


router = APIRouter(
    prefix="/analysis",
    tags=["analysis"],
)


@router.post(
    "/diversity",
    response_model=DiversityIndices,
    summary="Compute diversity indices",
    description="""
    Compute species richness, Shannon-Wiener, Simpson (D and 1 - D),
    Pielou evenness, Menhinick and Margalef indices for one sampling unit.

    An empty observation list is valid and yields all-zero indices.
    """,
    responses=RATE_LIMITED,
)
async def compute_diversity(
    payload: DiversityRequest,
    calculator: DiversityCalculatorDep,
) -> DiversityIndices:
    return calculator.compute_indices(payload.observations)


@router.post(
    "/species-area",
    response_model=PowerLawFit,
    summary="Fit species-area power law",
    description="""
    Fit S = c * A^z by least squares on log-transformed values.

    Points with area <= 0 or zero species are ignored. Fewer than two usable
    points yield c = z = rSquared = 0.
    """,
    responses=RATE_LIMITED,
)
async def fit_species_area(
    payload: SpeciesAreaRequest,
    fitter: AreaCurveFitterDep,
) -> PowerLawFit:
    return fitter.fit_power_law(payload.points)
