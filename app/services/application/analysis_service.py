"""
Application service: Orchestration layer for plot and project analyses.
"""
from typing import Optional
import csv
import io
import logging

from pydantic import Field

from app.config import settings
from app.domain.models import (
    CamelModel,
    DiversityIndices,
    NestedAreaSample,
    PowerLawFit,
    VegetationPlot,
)
from app.infrastructure.plot_repository import PlotNotFoundError, PlotRepository
from app.services.domain.area_curve_fitter import AreaCurveFitter
from app.services.domain.diversity_calculator import DiversityCalculator
from app.services.domain.species_area_sampler import SpeciesAreaSampler

logger = logging.getLogger(__name__)

INDEX_FIELDS = [
    "species_richness",
    "shannon_wiener",
    "simpson_index",
    "simpson_reciprocal",
    "pielou_evenness",
    "menhinick_index",
    "margalef_index",
]

CSV_HEADERS = [
    "plotNumber",
    "date",
    "latitude",
    "longitude",
    "measurementCount",
    "speciesRichness",
    "shannonWiener",
    "simpsonIndex",
    "simpsonReciprocal",
    "pielouEvenness",
    "menhinickIndex",
    "margalefIndex",
]


class CurvePoint(CamelModel):
    """A point on the fitted species-area curve."""
    area: float
    species: float


class SpeciesAreaCurve(CamelModel):
    """Nested-area samples of a plot together with their power-law fit."""
    plot_id: int
    samples: list[NestedAreaSample]
    fit: PowerLawFit
    fitted_curve: list[CurvePoint] = Field(default_factory=list)


class PlotDiversity(CamelModel):
    """Diversity indices of one plot within a project."""
    plot_id: int
    plot_number: str
    indices: DiversityIndices


class MeanDiversityIndices(DiversityIndices):
    """Averaged indices; richness becomes a mean and may be fractional."""
    species_richness: float


class ProjectDiversitySummary(CamelModel):
    """Per-plot indices and their project-wide averages."""
    project_id: int
    project_name: str
    plot_count: int
    total_measurements: int = Field(description="Measurements across all plots of the project")
    unique_species: int = Field(description="Distinct species pooled across all plots")
    average: MeanDiversityIndices
    plots: list[PlotDiversity]


class AnalysisService:
    """
    Application service for biodiversity analyses.

    Orchestrates data fetching and domain computations.
    Follows the application layer pattern - no maths here,
    only coordination between infrastructure and domain layers.
    """

    def __init__(
        self,
        repository: PlotRepository,
        calculator: Optional[DiversityCalculator] = None,
        fitter: Optional[AreaCurveFitter] = None,
        sampler: Optional[SpeciesAreaSampler] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            repository: Plot storage (in-memory or remote)
            calculator: Diversity index calculator
            fitter: Species-area power-law fitter
            sampler: Nested-area sampler for species-area curves
        """
        self.repository = repository
        self.calculator = calculator or DiversityCalculator()
        self.fitter = fitter or AreaCurveFitter()
        self.sampler = sampler or SpeciesAreaSampler()

    async def get_plot_diversity(self, plot_id: int) -> DiversityIndices:
        """
        Compute diversity indices for a stored plot.

        Raises:
            PlotNotFoundError: If the plot does not exist
        """
        observations = await self.repository.list_observations_for_plot(plot_id)
        logger.info(f"Computing diversity for plot {plot_id} ({len(observations)} observations)")
        return self.calculator.compute_indices(observations)

    async def get_species_area_curve(self, plot_id: int) -> SpeciesAreaCurve:
        """
        Sample nested areas of a plot and fit the species-area power law.

        Args:
            plot_id: Unique identifier for the plot

        Returns:
            SpeciesAreaCurve with samples, fit and fitted curve points

        Raises:
            PlotNotFoundError: If the plot does not exist
        """
        observations = await self.repository.list_observations_for_plot(plot_id)
        samples = self.sampler.sample(observations)
        fit = self.fitter.fit_power_law([s.to_area_observation() for s in samples])

        fitted_curve = []
        if fit.c > 0:
            fitted_curve = [
                CurvePoint(area=s.area, species=self.fitter.predict_species(fit, s.area))
                for s in samples
            ]

        logger.info(f"Species-area fit for plot {plot_id}: c={fit.c}, z={fit.z}, "
                    f"R²={fit.r_squared}")

        return SpeciesAreaCurve(
            plot_id=plot_id,
            samples=samples,
            fit=fit,
            fitted_curve=fitted_curve,
        )

    async def get_project_diversity(self, project_id: int) -> ProjectDiversitySummary:
        """
        Compute indices for every plot of a project and average them.

        Plot IDs that no longer resolve to a stored plot are skipped. A
        project with no remaining plots averages to all-zero indices.

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        project = await self.repository.get_project(project_id)

        plot_results = []
        total_measurements = 0
        pooled_species = set()
        for plot_id in project.plot_ids:
            try:
                plot = await self.repository.get_plot(plot_id)
            except PlotNotFoundError:
                logger.warning(f"Project {project_id} references missing plot {plot_id}, skipping")
                continue

            total_measurements += len(plot.measurements)
            pooled_species.update(o.species_id for o in plot.measurements)
            plot_results.append(PlotDiversity(
                plot_id=plot_id,
                plot_number=plot.plot_number,
                indices=self.calculator.compute_indices(plot.measurements),
            ))

        logger.info(f"Project {project_id} diversity over {len(plot_results)} plots")

        return ProjectDiversitySummary(
            project_id=project_id,
            project_name=project.name,
            plot_count=len(plot_results),
            total_measurements=total_measurements,
            unique_species=len(pooled_species),
            average=self._average_indices([p.indices for p in plot_results]),
            plots=plot_results,
        )

    async def export_plot_summary_csv(self) -> str:
        """
        Export one CSV row per stored plot with its diversity indices.

        Index values are rounded for display using settings.index_display_decimals.

        Returns:
            CSV document as text
        """
        plots = await self.repository.list_plots()
        decimals = settings.index_display_decimals

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_HEADERS)

        for plot in plots:
            writer.writerow(self._summary_row(plot, decimals))

        logger.info(f"Exported diversity summary for {len(plots)} plots")
        return buffer.getvalue()

    def _summary_row(self, plot: VegetationPlot, decimals: int) -> list:
        indices = self.calculator.compute_indices(plot.measurements)
        row = [
            plot.plot_number,
            plot.date.isoformat(),
            plot.location.latitude,
            plot.location.longitude,
            len(plot.measurements),
            indices.species_richness,
        ]
        row.extend(round(getattr(indices, name), decimals) for name in INDEX_FIELDS[1:])
        return row

    @staticmethod
    def _average_indices(indices: list[DiversityIndices]) -> MeanDiversityIndices:
        if not indices:
            return MeanDiversityIndices(**{name: 0.0 for name in INDEX_FIELDS})
        return MeanDiversityIndices(**{
            name: sum(getattr(i, name) for i in indices) / len(indices)
            for name in INDEX_FIELDS
        })
