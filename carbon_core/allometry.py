# MIT License
"""Allometric biomass equations.

Above-ground biomass per tree is driven by a single variable, the
diameter at breast height (DBH, cm).  Two regional defaults are
provided; a species may override them with a custom equation, see
:mod:`carbon_core.expression`.
"""

from __future__ import annotations
import math
import sys
from typing import Callable, Dict, Optional, Tuple

from loguru import logger

from .expression import evaluate_expression, is_valid_expression
from .params import Region

# region -> (a, b) in biomass_kg = exp(a + b * ln(D))
ALLOMETRY_COEFFICIENTS: Dict[str, Tuple[float, float]] = {
    "dry": (-1.996, 2.32),
    "moist": (-2.134, 2.530),
}

# largest argument math.exp accepts without overflowing
MAX_EXPONENT = math.log(sys.float_info.max)


def default_biomass_kg(diameter_cm: float, region: Region) -> float:
    """Biomass (kg per tree) from the regional default equation.

    Dry:   ``exp(-1.996 + 2.32 * ln(D))``
    Moist: ``exp(-2.134 + 2.530 * ln(D))``

    Returns 0 for non-positive or non-finite diameters, and for
    diameters so large the result is not representable as a float.
    """
    if diameter_cm is None or not math.isfinite(diameter_cm) or diameter_cm <= 0:
        return 0.0
    a, b = ALLOMETRY_COEFFICIENTS.get(region, ALLOMETRY_COEFFICIENTS["moist"])
    exponent = a + b * math.log(diameter_cm)
    if exponent > MAX_EXPONENT:
        return 0.0
    return math.exp(exponent)


def make_biomass_fn(region: Region, custom_equation: Optional[str] = None) -> Callable[[float], float]:
    """Build the per-tree biomass function of a species.

    With a custom equation, every call evaluates it first and falls back
    to the regional default when the result is invalid or negative.  An
    equation that does not parse is reported once and replaced by the
    default outright.
    """
    if not custom_equation:
        return lambda d: default_biomass_kg(d, region)
    if not is_valid_expression(custom_equation):
        logger.warning("Custom equation {!r} does not parse; using {} default", custom_equation, region)
        return lambda d: default_biomass_kg(d, region)

    def biomass(d: float) -> float:
        v = evaluate_expression(custom_equation, d)
        if v is not None and v >= 0:
            return v
        return default_biomass_kg(d, region)

    return biomass
