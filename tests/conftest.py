"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample observations
- Sample vegetation plots and projects
- In-memory plot repository
- FastAPI test client wired to that repository
"""
import pytest
from datetime import date
from typing import Iterator
from fastapi.testclient import TestClient

from app.main import app, limiter
from app.api.dependencies import get_plot_repository
from app.domain.models import (
    Disturbance,
    GroundCover,
    Location,
    Observation,
    Project,
    VegetationPlot,
)
from app.infrastructure.plot_repository import InMemoryPlotRepository


def make_observations(*counts: int) -> list[Observation]:
    """Build observations with counts[i] individuals of species i + 1."""
    observations = []
    for species_index, count in enumerate(counts, start=1):
        observations.extend(Observation(species_id=species_index) for _ in range(count))
    return observations


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def even_two_species() -> list[Observation]:
    """Four individuals, two species with two each."""
    return [
        Observation(species_id=1, dbh=12.0),
        Observation(species_id=2, height=8.5),
        Observation(species_id=1),
        Observation(species_id=2, canopy_cover=40.0),
    ]


@pytest.fixture
def rich_plot() -> VegetationPlot:
    """Plot with ten species of uneven abundance."""
    return VegetationPlot(
        id=1,
        plot_number="P-001",
        location=Location(latitude=12.9716, longitude=77.5946, accuracy=5.0, source="auto"),
        date=date(2024, 3, 14),
        observers=["A. Rao", "M. Iyer"],
        habitat="Dry deciduous forest",
        ground_cover=GroundCover(shrub=20, herb=15, grass=30, bare=10, rock=5, litter=20),
        disturbance=Disturbance(grazing=True),
        measurements=make_observations(5, 4, 3, 3, 2, 2, 1, 1, 1, 1),
    )


@pytest.fixture
def even_plot(even_two_species) -> VegetationPlot:
    """Plot with two equally abundant species."""
    return VegetationPlot(
        id=2,
        plot_number="P-002",
        location=Location(latitude=12.98, longitude=77.60),
        date=date(2024, 3, 15),
        measurements=even_two_species,
    )


@pytest.fixture
def empty_plot() -> VegetationPlot:
    """Plot surveyed with no individuals recorded."""
    return VegetationPlot(
        id=3,
        plot_number="P-003",
        location=Location(latitude=12.99, longitude=77.61),
        date=date(2024, 3, 16),
    )


@pytest.fixture
def sample_projects() -> list[Project]:
    return [
        Project(id=1, name="Western Ghats transect", plot_ids=[1, 2]),
        Project(id=2, name="Empty project"),
        Project(id=3, name="Broken project", plot_ids=[1, 99]),
    ]


@pytest.fixture
def memory_repository(rich_plot, even_plot, empty_plot, sample_projects) -> InMemoryPlotRepository:
    """In-memory repository seeded with the sample plots and projects."""
    return InMemoryPlotRepository(
        plots=[rich_plot, even_plot, empty_plot],
        projects=sample_projects,
    )


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with an empty rate-limit window."""
    limiter.reset()
    yield


@pytest.fixture
def test_client(memory_repository) -> Iterator[TestClient]:
    """Create a test client backed by the seeded in-memory repository."""
    app.dependency_overrides[get_plot_repository] = lambda: memory_repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
