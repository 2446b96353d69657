"""
Domain service: Biodiversity indices for a single sampling unit.

Computes, from a flat list of individual observations:
- Species richness
- Shannon-Wiener and Simpson indices (plus the Gini-Simpson complement)
- Pielou evenness
- Menhinick and Margalef richness indices

The calculator is stateless: every call builds its own abundance table and
never mutates the observations it is given.
"""
from typing import Sequence
import logging

from app.domain.models import DiversityIndices, Observation
from app.utils.diversity_formulas import (
    build_abundance_table,
    species_proportions,
    shannon_wiener,
    simpson_index,
    simpson_complement,
    pielou_evenness,
    menhinick_index,
    margalef_index,
)

logger = logging.getLogger(__name__)


class DiversityCalculator:
    """
    Domain service for plot-level diversity statistics.

    All indices use natural logarithms and full floating point precision;
    rounding for display is left to callers.
    """

    def compute_indices(self, observations: Sequence[Observation]) -> DiversityIndices:
        """
        Compute all diversity indices for one plot.

        Never raises: an empty list yields all-zero indices, and single
        species or single individual samples fall back to 0.0 wherever a
        formula would divide by zero.

        Args:
            observations: Individuals recorded in the plot

        Returns:
            DiversityIndices with seven finite values
        """
        abundance = build_abundance_table(o.species_id for o in observations)
        total_individuals = sum(abundance.values())
        richness = len(abundance)

        proportions = species_proportions(abundance)
        shannon = shannon_wiener(proportions)
        simpson = simpson_index(proportions)

        indices = DiversityIndices(
            species_richness=richness,
            shannon_wiener=shannon,
            simpson_index=simpson,
            simpson_reciprocal=simpson_complement(simpson),
            pielou_evenness=pielou_evenness(shannon, richness),
            menhinick_index=menhinick_index(richness, total_individuals),
            margalef_index=margalef_index(richness, total_individuals),
        )

        logger.debug(f"Computed indices for {total_individuals} individuals, "
                     f"{richness} species: H'={shannon:.3f}, D={simpson:.3f}")

        return indices
