"""
Ecological diversity formulas.

Provides utilities for:
- Abundance tables (species id -> count)
- Shannon-Wiener and Simpson indices
- Evenness and richness-density indices

Each index function is total: degenerate abundance tables yield 0.0
instead of NaN, infinity or an exception.
"""
from collections import Counter
from typing import Hashable, Iterable
import math

import numpy as np


def build_abundance_table(species_ids: Iterable[Hashable]) -> Counter:
    """
    Count occurrences of each species identifier.

    Args:
        species_ids: One identifier per recorded individual

    Returns:
        Counter mapping species id to number of individuals
    """
    return Counter(species_ids)


def species_proportions(abundance: Counter) -> np.ndarray:
    """
    Convert an abundance table into relative proportions p_i = c_i / N.

    Args:
        abundance: Species id -> count

    Returns:
        Array of proportions (empty when there are no individuals)
    """
    counts = np.fromiter(abundance.values(), dtype=float, count=len(abundance))
    total = counts.sum()
    if total == 0:
        return np.empty(0, dtype=float)
    return counts / total


def shannon_wiener(proportions: np.ndarray) -> float:
    """
    Shannon-Wiener index H' = -sum(p_i * ln(p_i)).

    Args:
        proportions: Relative abundance of each species

    Returns:
        H' in nats, 0.0 for an empty sample
    """
    present = proportions[proportions > 0]
    if present.size == 0:
        return 0.0
    # max() folds the -0.0 of a single-species sample into 0.0
    return max(0.0, float(-np.sum(present * np.log(present))))


def simpson_index(proportions: np.ndarray) -> float:
    """Simpson's dominance D = sum(p_i^2); 0.0 for an empty sample."""
    if proportions.size == 0:
        return 0.0
    return float(np.sum(proportions * proportions))


def simpson_complement(simpson: float) -> float:
    """
    Gini-Simpson index 1 - D.

    Reported under the name "simpson reciprocal" by downstream charts and
    exports, so the complement (not 1/D) is what callers expect.
    """
    return 1.0 - simpson if simpson > 0 else 0.0


def pielou_evenness(shannon: float, richness: int) -> float:
    """Pielou's J = H' / ln(S); 0.0 when S <= 1."""
    if richness <= 1:
        return 0.0
    return shannon / math.log(richness)


def menhinick_index(richness: int, total_individuals: int) -> float:
    """Menhinick's D_Mn = S / sqrt(N); 0.0 when N = 0."""
    if total_individuals == 0:
        return 0.0
    return richness / math.sqrt(total_individuals)


def margalef_index(richness: int, total_individuals: int) -> float:
    """Margalef's D_Mg = (S - 1) / ln(N); 0.0 when N <= 1."""
    if total_individuals <= 1:
        return 0.0
    return (richness - 1) / math.log(total_individuals)
