"""
Domain service: Nested-plot species counts for species-area curves.

A single surveyed plot does not record which nested sub-area each individual
was found in, so species counts per nested size are interpolated from the
plot's total number of unique species.
"""
from typing import Optional, Sequence
import logging
import math

from app.domain.models import NestedAreaSample, Observation
from app.config import settings

logger = logging.getLogger(__name__)


def nested_plot_label(area: float) -> str:
    """Label a square nested plot by its side length, e.g. 400 -> '20×20m'."""
    side = math.sqrt(area)
    side_text = f"{side:g}" if side == int(side) else f"{side:.1f}"
    return f"{side_text}×{side_text}m"


class SpeciesAreaSampler:
    """Derives nested-area samples from a plot's measurements."""

    def __init__(self, nested_plot_sizes: Optional[Sequence[float]] = None):
        self.nested_plot_sizes = sorted(nested_plot_sizes or settings.nested_plot_sizes)

    def sample(self, observations: Sequence[Observation]) -> list[NestedAreaSample]:
        """
        Interpolate species counts for each nested plot size.

        Size i of k (0-based, smallest first) is assigned
        min(U, max(1, floor((i + 1) * U / k))) species, where U is the number
        of unique species in the plot.

        Args:
            observations: Individuals recorded in the plot

        Returns:
            One sample per nested size, or an empty list for an empty plot
        """
        if not observations:
            return []

        unique_species = len({o.species_id for o in observations})
        size_count = len(self.nested_plot_sizes)

        samples = []
        for index, area in enumerate(self.nested_plot_sizes):
            species = min(
                unique_species,
                max(1, (index + 1) * unique_species // size_count),
            )
            samples.append(NestedAreaSample(
                label=nested_plot_label(area),
                area=area,
                species=species,
            ))

        logger.debug(f"Sampled {size_count} nested sizes for {unique_species} species")
        return samples
