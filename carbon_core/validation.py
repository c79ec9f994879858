# MIT License
"""Pre-flight checks run by the calculator page before a projection.

The engine accepts anything well typed; these checks catch the inputs a
user most likely did not mean (no species, shares above 100 %, missing
schedule areas) and report them as a single readable message.
"""

from __future__ import annotations
import math
from typing import List, Optional

from .params import CalculatorInputs, SpeciesDefinition
from .schedule import schedule_length
from .utils import finite_or


def total_species_percent(species: List[SpeciesDefinition]) -> float:
    return sum(finite_or(sp.area_share_percent, 0.0) for sp in species)


def _species_problem(sp: SpeciesDefinition) -> Optional[str]:
    if not sp.name:
        return "Each species row needs a name."
    if sp.area_share_percent is None or not math.isfinite(sp.area_share_percent):
        return f'Enter % area for "{sp.name}".'
    if sp.input_mode == "spacing" and finite_or(sp.spacing_m, 0.0) <= 0:
        return f'Enter spacing (m) for "{sp.name}".'
    if sp.input_mode == "density" and finite_or(sp.density_trees_per_ha, 0.0) <= 0:
        return f'Enter density (trees/ha) for "{sp.name}".'
    if sp.use_custom_equation and not (sp.custom_equation or "").strip():
        return f'Enter a biomass equation for "{sp.name}" or turn off "custom".'
    return None


def validate_inputs(inputs: CalculatorInputs) -> Optional[str]:
    """Return the first problem found in `inputs`, or ``None`` if they are usable.

    Checks, in order: year ordering, species presence and percentage
    total, each species row, then the schedule (or the project area when
    no schedule is used).
    """
    project = inputs.project
    if project.crediting_end_year < project.planting_year:
        return "End year must be ≥ planting year."

    if not inputs.species:
        return "Add at least one species."
    total = total_species_percent(inputs.species)
    if total <= 0:
        return "Species % must be > 0."
    if total > 100:
        return "Species % sum cannot exceed 100%."
    for sp in inputs.species:
        problem = _species_problem(sp)
        if problem:
            return problem

    schedule = inputs.schedule
    if schedule.enabled:
        n = schedule_length(schedule)
        if n <= 0:
            return "Schedule years must be > 0."
        if schedule.mode == "constant":
            if schedule.constant_area_ha is None:
                return "Enter constant area per year (ha)."
            if finite_or(schedule.constant_area_ha, -1.0) < 0:
                return "Constant area per year must be non-negative."
        else:
            for i in range(n):
                area = schedule.custom_areas_ha.get(project.planting_year + i)
                if area is None or finite_or(area, -1.0) < 0:
                    return "Enter non-negative area (ha) for each schedule year."
    elif finite_or(project.project_area_ha, 0.0) <= 0:
        return "Enter Total Project Area (ha)."
    return None
