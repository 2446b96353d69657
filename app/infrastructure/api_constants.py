"""
Field-data API endpoint constants and configuration.

Centralizing these values makes it easy to swap out endpoints or update API versions.
"""


class FieldDataEndpoints:
    """Field-data API endpoint paths."""

    # Base paths
    SURVEY_BASE = "/survey"

    PLOTS = f"{SURVEY_BASE}/plots/"
    PLOT_BY_ID = f"{SURVEY_BASE}/plots/{{plot_id}}/"
    PROJECTS = f"{SURVEY_BASE}/projects/"
    PROJECT_BY_ID = f"{SURVEY_BASE}/projects/{{project_id}}/"
    SPECIES = f"{SURVEY_BASE}/species/"

    @classmethod
    def plot(cls, plot_id: int) -> str:
        """
        Get the endpoint for a single plot.

        Args:
            plot_id: Plot ID

        Returns:
            Formatted endpoint path
        """
        return cls.PLOT_BY_ID.format(plot_id=plot_id)

    @classmethod
    def project(cls, project_id: int) -> str:
        return cls.PROJECT_BY_ID.format(project_id=project_id)


class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"

    # Timeouts (in seconds)
    DEFAULT_TIMEOUT = 30.0

    # Pagination
    DEFAULT_PAGE_SIZE = 100
