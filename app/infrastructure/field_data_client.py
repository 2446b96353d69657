"""
Infrastructure layer: Remote field-data API client with retry logic.

Implements the PlotRepository interface on top of a field-data backend that
stores plots, projects and the species registry collected in the field.
"""
from typing import Any, Dict, List, Optional
import logging

from pydantic import BaseModel
import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
)

from app.config import settings
from app.domain.models import Observation, Project, Species, VegetationPlot
from app.infrastructure.api_constants import APIConstants, FieldDataEndpoints
from app.infrastructure.plot_repository import PlotNotFoundError, ProjectNotFoundError

logger = logging.getLogger(__name__)


class PlotsResponse(BaseModel):
    """Paginated response from the plots endpoint."""
    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[VegetationPlot]


class SpeciesResponse(BaseModel):
    """Paginated response from the species endpoint."""
    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[Species]


class FieldDataAPIError(Exception):
    """Raised when the field-data API fails or rejects a request."""

    def __init__(self, message: str, status_code: int = 502):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _is_retryable(error: BaseException) -> bool:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return isinstance(error, httpx.RequestError)


class FieldDataAPIClient:
    """
    Client for the remote field-data API.
    Implements retry logic with exponential backoff.
    """

    def __init__(self):
        """Initialize the API client with configuration."""
        self.base_url = settings.field_data_api_base_url
        self.api_key = settings.field_data_api_key
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "accept": APIConstants.CONTENT_TYPE_JSON,
            },
            timeout=APIConstants.DEFAULT_TIMEOUT,
        )

    async def __aenter__(self) -> "FieldDataAPIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception(_is_retryable),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make an HTTP request, retrying server and transport errors.

        Client errors (4xx) are converted to FieldDataAPIError immediately
        and are not retried.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path or absolute pagination URL
            **kwargs: Additional arguments for the request

        Returns:
            Response data as dictionary
        """
        response = await self.client.request(method, endpoint, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code >= 500:
                raise
            raise FieldDataAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        return response.json()

    async def _request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        """
        Make a request and convert exhausted retries into FieldDataAPIError.

        Raises:
            FieldDataAPIError: If the request fails after retries
        """
        try:
            return await self._make_request(method, endpoint, **kwargs)
        except httpx.HTTPStatusError as e:
            logger.error(f"Field-data API {method} {endpoint} failed after retries: "
                         f"{e.response.status_code}")
            raise FieldDataAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        except httpx.RequestError as e:
            logger.error(f"Field-data API {method} {endpoint} unreachable: {e}")
            raise FieldDataAPIError(f"API request error: {str(e)}")

    async def get_plot(self, plot_id: int) -> VegetationPlot:
        """
        Fetch a single plot with its measurements.

        Raises:
            PlotNotFoundError: If the API has no such plot
            FieldDataAPIError: If the request fails
        """
        try:
            data = await self._request("GET", FieldDataEndpoints.plot(plot_id))
        except FieldDataAPIError as e:
            if e.status_code == 404:
                raise PlotNotFoundError(plot_id) from e
            raise
        return VegetationPlot.model_validate(data)

    async def list_plots(self) -> list[VegetationPlot]:
        """
        Fetch every plot, following pagination links.

        Returns:
            List of VegetationPlot instances
        """
        plots: list[VegetationPlot] = []
        endpoint: Optional[str] = FieldDataEndpoints.PLOTS
        params: Optional[dict] = {"page_size": APIConstants.DEFAULT_PAGE_SIZE}

        while endpoint:
            data = await self._request("GET", endpoint, params=params)
            page = PlotsResponse(**data)
            plots.extend(page.results)
            endpoint = page.next
            # The next link already carries its query string
            params = None

        logger.debug(f"Fetched {len(plots)} plots from field-data API")
        return plots

    async def list_observations_for_plot(self, plot_id: int) -> list[Observation]:
        plot = await self.get_plot(plot_id)
        return plot.measurements

    async def get_project(self, project_id: int) -> Project:
        """
        Fetch a project definition.

        Raises:
            ProjectNotFoundError: If the API has no such project
            FieldDataAPIError: If the request fails
        """
        try:
            data = await self._request("GET", FieldDataEndpoints.project(project_id))
        except FieldDataAPIError as e:
            if e.status_code == 404:
                raise ProjectNotFoundError(project_id) from e
            raise
        return Project.model_validate(data)

    async def list_species(self) -> list[Species]:
        data = await self._request("GET", FieldDataEndpoints.SPECIES)
        return SpeciesResponse(**data).results

    async def save_plot(self, plot: VegetationPlot) -> int:
        """
        Create or update a plot.

        Returns:
            The stored plot's ID
        """
        payload = plot.model_dump(mode="json", by_alias=True, exclude_none=True)
        if plot.id is None:
            data = await self._request("POST", FieldDataEndpoints.PLOTS, json=payload)
        else:
            data = await self._request("PUT", FieldDataEndpoints.plot(plot.id), json=payload)
        return int(data["id"])

    async def save_project(self, project: Project) -> int:
        payload = project.model_dump(mode="json", by_alias=True, exclude_none=True)
        if project.id is None:
            data = await self._request("POST", FieldDataEndpoints.PROJECTS, json=payload)
        else:
            data = await self._request(
                "PUT", FieldDataEndpoints.project(project.id), json=payload
            )
        return int(data["id"])


# Singleton instance
_field_data_client: Optional[FieldDataAPIClient] = None


def get_field_data_client() -> FieldDataAPIClient:
    """
    Get or create the singleton field-data client instance.

    Returns:
        FieldDataAPIClient instance
    """
    global _field_data_client
    if _field_data_client is None:
        _field_data_client = FieldDataAPIClient()
    return _field_data_client
