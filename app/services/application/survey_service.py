"""
Application service: Recording survey data.

Stores new plots and projects and exposes the species registry, so the
analysis endpoints have something to work on.
"""
import logging

from app.domain.models import Project, Species, VegetationPlot
from app.infrastructure.plot_repository import PlotRepository

logger = logging.getLogger(__name__)


class SurveyService:
    """Application service for creating and listing survey records."""

    def __init__(self, repository: PlotRepository):
        self.repository = repository

    async def create_plot(self, plot: VegetationPlot) -> VegetationPlot:
        """
        Store a new plot.

        Any ID on the incoming plot is discarded; the repository assigns one.

        Args:
            plot: Plot as recorded in the field

        Returns:
            The stored plot with its assigned ID
        """
        plot_id = await self.repository.save_plot(plot.model_copy(update={"id": None}))
        logger.info(f"Created plot {plot_id} ({plot.plot_number}, "
                    f"{len(plot.measurements)} measurements)")
        return await self.repository.get_plot(plot_id)

    async def list_plots(self) -> list[VegetationPlot]:
        return await self.repository.list_plots()

    async def create_project(self, project: Project) -> Project:
        """
        Store a new project.

        Plot IDs are stored as given; IDs without a stored plot are skipped
        when project statistics are computed.

        Returns:
            The stored project with its assigned ID
        """
        project_id = await self.repository.save_project(project.model_copy(update={"id": None}))
        logger.info(f"Created project {project_id} ({project.name}, {len(project.plot_ids)} plots)")
        return await self.repository.get_project(project_id)

    async def list_species(self) -> list[Species]:
        return await self.repository.list_species()
