# MIT License
"""Species setup: turn user-facing species rows into runtime parameters."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List

from .allometry import make_biomass_fn
from .params import Region, SpeciesDefinition
from .utils import clamp, density_from_spacing, finite_or


@dataclass(frozen=True)
class ResolvedSpecies:
    name: str
    region: Region
    percent: float
    density_trees_per_ha: float
    growth_rate_cm_per_year: float
    initial_diameter_cm: float
    biomass_fn: Callable[[float], float]


def resolve_density(sp: SpeciesDefinition) -> float:
    if sp.input_mode == "density":
        return max(0.0, finite_or(sp.density_trees_per_ha, 0.0))
    return density_from_spacing(sp.spacing_m)


def resolve_species(sp: SpeciesDefinition, default_growth_rate_cm_per_year: float) -> ResolvedSpecies:
    """Normalise a species row.

    Parameters
    ----------
    sp:
        The species definition as entered.
    default_growth_rate_cm_per_year:
        Project-level growth rate used when the species has no positive
        rate of its own.

    Returns
    -------
    ResolvedSpecies
        Density, growth rate, initial diameter and a bound biomass
        function, all coerced to finite values.
    """
    growth = finite_or(sp.growth_rate_cm_per_year, 0.0)
    if growth <= 0:
        growth = finite_or(default_growth_rate_cm_per_year, 0.0)
    equation = sp.custom_equation if sp.use_custom_equation and sp.custom_equation else None
    return ResolvedSpecies(
        name=sp.name or "Unnamed",
        region=sp.region,
        percent=clamp(finite_or(sp.area_share_percent, 0.0), 0.0, 100.0),
        density_trees_per_ha=resolve_density(sp),
        growth_rate_cm_per_year=growth,
        initial_diameter_cm=finite_or(sp.initial_diameter_cm, 0.0),
        biomass_fn=make_biomass_fn(sp.region, equation),
    )


def resolve_all(species: List[SpeciesDefinition], default_growth_rate_cm_per_year: float) -> List[ResolvedSpecies]:
    return [resolve_species(sp, default_growth_rate_cm_per_year) for sp in species]
