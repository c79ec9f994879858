# MIT License
"""Carbon projection engine.

For every modelled year the engine walks all planting cohorts (one per
schedule entry) and all species, ages each cohort, applies mortality,
grows the diameter, converts it to biomass through the species'
allometry and converts biomass to tonnes of CO₂-equivalent.  Totals are
kept per year and per species.

The functions here are pure: no I/O, no shared state, and degenerate
numeric input produces zero-valued output rather than an exception.
"""

from __future__ import annotations
from typing import List
from loguru import logger

from .params import CalculatorInputs, ProjectParameters, ScheduleEntry
from .results import CalculationResult, SpeciesSummary, SpeciesYearRecord, YearRecord
from .schedule import build_schedule
from .species import ResolvedSpecies, resolve_all
from .utils import biomass_kg_to_co2e_tonnes, clamp, finite_or

MAX_MODEL_YEARS = 300


def model_span(project: ProjectParameters) -> int:
    """Number of years after the planting year to model, capped at 300.

    Negative when the end year precedes the planting year.
    """
    return min(project.crediting_end_year - project.planting_year, MAX_MODEL_YEARS)


def effective_mortality(project: ProjectParameters) -> float:
    if not project.consider_mortality:
        return 0.0
    return clamp(finite_or(project.mortality_rate, 0.0), 0.0, 1.0)


def run_projection(
    project: ProjectParameters,
    schedule: List[ScheduleEntry],
    species: List[ResolvedSpecies],
) -> CalculationResult:
    """Project yearly biomass, surviving trees and CO₂e credits.

    Parameters
    ----------
    project:
        Time horizon, mortality policy and the year-zero rule.
    schedule:
        Planting schedule; each entry is one cohort.
    species:
        Resolved species, see :func:`carbon_core.species.resolve_species`.

    Returns
    -------
    CalculationResult
        One :class:`YearRecord` per year from the planting year to the
        crediting end year inclusive, the cumulative credits and the
        cumulative credits per species.
    """
    py = project.planting_year
    mort = effective_mortality(project)
    force_zero = project.force_year_zero_to_zero
    yearly: List[YearRecord] = []

    for g in range(model_span(project) + 1):
        total_biomass_kg = 0.0
        total_credits_t = 0.0
        total_trees = 0.0
        per_species = [SpeciesYearRecord(name=sp.name) for sp in species]

        for entry in schedule:
            cohort_start = entry.year - py
            if cohort_start > g:
                continue  # not planted yet
            age = g - cohort_start

            for idx, sp in enumerate(species):
                if sp.percent <= 0:
                    continue
                area_ha = (sp.percent / 100) * entry.area_ha
                initial_trees = area_ha * sp.density_trees_per_ha
                surviving = initial_trees * (1 - mort) ** age

                dbh = sp.initial_diameter_cm + sp.growth_rate_cm_per_year * age
                if force_zero and age == 0:
                    dbh = 0.0
                biomass_kg = finite_or(sp.biomass_fn(dbh) * surviving, 0.0)
                if force_zero and age == 0:
                    biomass_kg = 0.0
                credits_t = biomass_kg_to_co2e_tonnes(biomass_kg)

                total_biomass_kg += biomass_kg
                total_credits_t += credits_t
                total_trees += surviving

                rec = per_species[idx]
                rec.credits_t += credits_t
                rec.biomass_kg += biomass_kg
                rec.surviving_trees += surviving
                rec.diameter_cm = dbh

        yearly.append(YearRecord(
            year=py + g,
            credits_t=total_credits_t,
            biomass_kg=total_biomass_kg,
            surviving_trees=total_trees,
            per_species=per_species,
        ))

    summary = [
        SpeciesSummary(name=sp.name, total_credits_t=sum(r.per_species[idx].credits_t for r in yearly))
        for idx, sp in enumerate(species)
    ]
    return CalculationResult(
        yearly_breakdown=yearly,
        total_credits_t=sum(r.credits_t for r in yearly),
        species_summary=summary,
    )


def calculate(inputs: CalculatorInputs) -> CalculationResult:
    """Run a full calculation from calculator inputs.

    Builds the planting schedule, resolves the species and runs the
    projection.  Inputs are assumed to have passed
    :func:`carbon_core.validation.validate_inputs`; if they have not, the
    result is still well defined.
    """
    project = inputs.project
    schedule = build_schedule(project.planting_year, inputs.schedule, project.project_area_ha)
    species = resolve_all(inputs.species, project.default_growth_rate_cm_per_year)
    logger.info(
        "Running projection {}-{}: {} cohort(s), {} species",
        project.planting_year, project.crediting_end_year, len(schedule), len(species),
    )
    result = run_projection(project, schedule, species)
    logger.info("Projection complete: {:.2f} tCO2e over {} year(s)", result.total_credits_t, len(result.yearly_breakdown))
    return result
