"""
Domain service: Species-area power-law fitting.

Fits S = c * A^z by least squares on ln(S) = ln(c) + z * ln(A) and reports
the coefficient of determination of the log-log line.
"""
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Sequence
import logging
import math

import numpy as np

from app.domain.models import AreaObservation, PowerLawFit
from app.utils.regression import least_squares_line

logger = logging.getLogger(__name__)

FIT_DECIMALS = 4
"""Decimal places of c, z and R² in every returned fit."""

ZERO_FIT = PowerLawFit(c=0.0, z=0.0, r_squared=0.0)

_FIT_QUANTUM = Decimal(1).scaleb(-FIT_DECIMALS)
# Wide enough for any finite double plus the fractional digits
_FIT_CONTEXT = Context(prec=400)


def round_half_up(value: float) -> float:
    """
    Round to FIT_DECIMALS places, halves away from zero.

    The exact binary value is rounded, so 0.15625 becomes 0.1563 where the
    built-in round() would give 0.1562.
    """
    if not math.isfinite(value):
        return value
    rounded = Decimal(value).quantize(_FIT_QUANTUM, rounding=ROUND_HALF_UP, context=_FIT_CONTEXT)
    return float(rounded)


class AreaCurveFitter:
    """
    Domain service for the species-area relationship.

    Degenerate input (fewer than two usable points) yields ZERO_FIT rather
    than an error.
    """

    def fit_power_law(self, points: Sequence[AreaObservation]) -> PowerLawFit:
        """
        Fit the power-law species-area curve.

        Points with a non-positive area or species count cannot be
        log-transformed and are ignored. Valid points are sorted before
        fitting so the result does not depend on input order.

        Args:
            points: (area, species count) observations

        Returns:
            PowerLawFit with c, z and R² rounded to four decimals
        """
        valid = sorted(
            (p.area, p.species_count)
            for p in points
            if p.area > 0 and p.species_count > 0
        )

        if len(valid) < 2:
            logger.debug(f"Only {len(valid)} usable point(s) out of {len(points)}, "
                         f"returning zero fit")
            return ZERO_FIT

        areas, counts = np.array(valid, dtype=float).T
        line = least_squares_line(np.log(areas), np.log(counts))
        c = float(np.exp(line.intercept))

        fit = PowerLawFit(
            c=round_half_up(c),
            z=round_half_up(line.slope),
            r_squared=round_half_up(line.r_squared),
        )

        logger.debug(f"Fitted S = {fit.c} * A^{fit.z} on {len(valid)} points "
                     f"(R²={fit.r_squared})")

        return fit

    @staticmethod
    def predict_species(fit: PowerLawFit, area: float) -> float:
        """
        Evaluate the fitted curve at an area.

        Args:
            fit: Result of fit_power_law
            area: Area in m²

        Returns:
            Predicted species count (0.0 for non-positive areas)
        """
        if area <= 0:
            return 0.0
        return fit.c * area ** fit.z
