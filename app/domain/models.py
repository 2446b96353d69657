"""
Domain models for vegetation plots and their analyses.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, databases, etc.).
"""
from datetime import date as Date
from typing import List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


SpeciesId = Union[int, str, UUID]
"""Opaque species identifier. Never dereferenced by the analysis code."""


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys, accepting either form."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Observation(CamelModel):
    """A single recorded individual in a plot."""
    species_id: SpeciesId
    gbh: Optional[float] = Field(default=None, description="Girth at breast height in cm")
    dbh: Optional[float] = Field(default=None, description="Diameter at breast height in cm")
    height: Optional[float] = Field(default=None, description="Total height in m")
    height_at_first_branch: Optional[float] = Field(
        default=None, description="Height to first branch in m"
    )
    canopy_cover: Optional[float] = Field(default=None, description="Canopy cover percentage")


class DiversityIndices(CamelModel):
    """Diversity and evenness statistics for one sampling unit."""
    model_config = ConfigDict(frozen=True)

    species_richness: int
    shannon_wiener: float
    simpson_index: float
    simpson_reciprocal: float = Field(
        description="Gini-Simpson complement 1 - D (not 1/D)"
    )
    pielou_evenness: float
    menhinick_index: float
    margalef_index: float


class AreaObservation(CamelModel):
    """One nested-plot sampling point for the species-area relationship."""
    area: float = Field(description="Sampled area in m²")
    species_count: int = Field(ge=0, description="Distinct species found in the area")


class PowerLawFit(CamelModel):
    """Fitted parameters of S = c * A^z."""
    model_config = ConfigDict(frozen=True)

    c: float
    z: float
    r_squared: float


class NestedAreaSample(CamelModel):
    """Species count derived for one nested plot size."""
    label: str
    area: float
    species: int

    def to_area_observation(self) -> AreaObservation:
        return AreaObservation(area=self.area, species_count=self.species)


class Location(CamelModel):
    """GPS location of a plot."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy: Optional[float] = None
    altitude: Optional[float] = None
    source: Optional[Literal["auto", "manual"]] = None


class GroundCover(CamelModel):
    """Ground cover percentages by class."""
    shrub: float = Field(default=0.0, ge=0, le=100)
    herb: float = Field(default=0.0, ge=0, le=100)
    grass: float = Field(default=0.0, ge=0, le=100)
    bare: float = Field(default=0.0, ge=0, le=100)
    rock: float = Field(default=0.0, ge=0, le=100)
    litter: float = Field(default=0.0, ge=0, le=100)


class Disturbance(CamelModel):
    """Disturbance indicators observed at a plot."""
    grazing: bool = False
    poaching: bool = False
    lopping: bool = False
    invasives: bool = False
    fire: bool = False

    @field_validator("grazing", "poaching", "lopping", "invasives", "fire", mode="before")
    @classmethod
    def _missing_is_false(cls, value):
        # Records synced from older clients may carry nulls
        return False if value is None else value


class Species(CamelModel):
    """Species registry entry."""
    id: Optional[int] = None
    name: str
    scientific_name: Optional[str] = None
    family: Optional[str] = None
    common_names: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class VegetationPlot(CamelModel):
    """A surveyed vegetation plot with its species measurements."""
    id: Optional[int] = None
    plot_number: str
    location: Location
    date: Date
    observers: List[str] = Field(default_factory=list)
    habitat: Optional[str] = None
    slope: Optional[float] = None
    aspect: Optional[float] = None
    notes: Optional[str] = None
    ground_cover: GroundCover = Field(default_factory=GroundCover)
    disturbance: Disturbance = Field(default_factory=Disturbance)
    measurements: List[Observation] = Field(default_factory=list)


class Project(CamelModel):
    """A named group of plots."""
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    plot_ids: List[int] = Field(default_factory=list)
