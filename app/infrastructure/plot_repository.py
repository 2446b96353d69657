"""
Infrastructure layer: Plot storage interface and in-process implementation.
"""
from typing import Optional, Protocol
import logging

from app.domain.models import Observation, Project, Species, VegetationPlot

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """Raised when a stored record does not exist."""

    def __init__(self, kind: str, record_id: int):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class PlotNotFoundError(RecordNotFoundError):
    def __init__(self, plot_id: int):
        super().__init__("Plot", plot_id)


class ProjectNotFoundError(RecordNotFoundError):
    def __init__(self, project_id: int):
        super().__init__("Project", project_id)


class PlotRepository(Protocol):
    """Data-access interface consumed by the analysis service."""

    async def get_plot(self, plot_id: int) -> VegetationPlot: ...

    async def list_plots(self) -> list[VegetationPlot]: ...

    async def list_observations_for_plot(self, plot_id: int) -> list[Observation]: ...

    async def get_project(self, project_id: int) -> Project: ...

    async def list_species(self) -> list[Species]: ...

    async def save_plot(self, plot: VegetationPlot) -> int: ...

    async def save_project(self, project: Project) -> int: ...


DEFAULT_SPECIES = [
    Species(name="Teak", scientific_name="Tectona grandis"),
    Species(name="Rosewood", scientific_name="Dalbergia latifolia"),
    Species(name="Sandalwood", scientific_name="Santalum album"),
]


class InMemoryPlotRepository:
    """
    Plot repository held in process memory.

    Seeds the default species list on construction when no species are
    given. Records are copied on the way in and out so callers cannot
    mutate stored state.
    """

    def __init__(
        self,
        plots: Optional[list[VegetationPlot]] = None,
        projects: Optional[list[Project]] = None,
        species: Optional[list[Species]] = None,
    ):
        self._plots: dict[int, VegetationPlot] = {}
        self._projects: dict[int, Project] = {}
        self._species: dict[int, Species] = {}

        for entry in species or DEFAULT_SPECIES:
            new_id = entry.id or self._next_id(self._species)
            self._species[new_id] = entry.model_copy(update={"id": new_id})
        for plot in plots or []:
            new_id = plot.id or self._next_id(self._plots)
            self._plots[new_id] = plot.model_copy(update={"id": new_id}, deep=True)
        for project in projects or []:
            new_id = project.id or self._next_id(self._projects)
            self._projects[new_id] = project.model_copy(update={"id": new_id}, deep=True)

        logger.info(f"In-memory plot store ready: {len(self._plots)} plots, "
                    f"{len(self._projects)} projects, {len(self._species)} species")

    @staticmethod
    def _next_id(table: dict) -> int:
        return max(table, default=0) + 1

    async def get_plot(self, plot_id: int) -> VegetationPlot:
        plot = self._plots.get(plot_id)
        if plot is None:
            raise PlotNotFoundError(plot_id)
        return plot.model_copy(deep=True)

    async def list_plots(self) -> list[VegetationPlot]:
        return [plot.model_copy(deep=True) for _, plot in sorted(self._plots.items())]

    async def list_observations_for_plot(self, plot_id: int) -> list[Observation]:
        plot = await self.get_plot(plot_id)
        return plot.measurements

    async def get_project(self, project_id: int) -> Project:
        project = self._projects.get(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project.model_copy(deep=True)

    async def list_species(self) -> list[Species]:
        return [entry.model_copy() for _, entry in sorted(self._species.items())]

    async def save_plot(self, plot: VegetationPlot) -> int:
        plot_id = plot.id or self._next_id(self._plots)
        self._plots[plot_id] = plot.model_copy(update={"id": plot_id}, deep=True)
        logger.debug(f"Saved plot {plot_id} ({plot.plot_number})")
        return plot_id

    async def save_project(self, project: Project) -> int:
        project_id = project.id or self._next_id(self._projects)
        self._projects[project_id] = project.model_copy(update={"id": project_id}, deep=True)
        logger.debug(f"Saved project {project_id} ({project.name})")
        return project_id
