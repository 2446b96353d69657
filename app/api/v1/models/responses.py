"""
API request and response models using Pydantic.
"""
from typing import List
from pydantic import ConfigDict, Field

from app.domain.models import AreaObservation, CamelModel, Observation


class DiversityRequest(CamelModel):
    """Request body for ad-hoc diversity computation."""
    observations: List[Observation] = Field(
        default_factory=list,
        description="Individuals recorded in one sampling unit"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "observations": [
                    {"speciesId": 1, "dbh": 24.5},
                    {"speciesId": 1},
                    {"speciesId": 2, "height": 11.0},
                    {"speciesId": 2},
                ]
            }
        }
    )


class SpeciesAreaRequest(CamelModel):
    """Request body for ad-hoc species-area fitting."""
    points: List[AreaObservation] = Field(
        default_factory=list,
        description="(area, species count) observations"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "points": [
                    {"area": 25, "speciesCount": 3},
                    {"area": 100, "speciesCount": 5},
                    {"area": 400, "speciesCount": 8},
                    {"area": 1600, "speciesCount": 12},
                ]
            }
        }
    )


class ErrorResponse(CamelModel):
    """Error body returned by the API."""
    error: str
    detail: str
