"""Core package for carbon-offset credit projections.

This package contains the deterministic projection engine used by the
Streamlit calculator: planting schedules, species setup, allometric
biomass equations (including sandboxed custom equations), the cohort
projection loop, validation, tabular views and plotting helpers.

Each submodule exposes pure functions that accept typed parameter models
and return typed results or pandas DataFrames.  The high-level
`calculate` helper in `projection.py` composes them into a full run.
"""

from .params import CalculatorInputs, ProjectParameters, ScheduleParams, ScheduleEntry, SpeciesDefinition
from .results import CalculationResult, YearRecord, SpeciesYearRecord, SpeciesSummary, yearly_frame, species_frame, summary_frame, results_to_csv
from .allometry import default_biomass_kg, make_biomass_fn
from .expression import evaluate_expression, parse_expression, ExpressionError
from .schedule import build_schedule, scheduled_total_area
from .species import ResolvedSpecies, resolve_species
from .projection import run_projection, calculate
from .validation import validate_inputs
from .editor import species_from_table, species_table
from .utils import biomass_kg_to_co2e_tonnes, density_from_spacing, spacing_from_density

__all__ = [
    "CalculatorInputs",
    "ProjectParameters",
    "ScheduleParams",
    "ScheduleEntry",
    "SpeciesDefinition",
    "CalculationResult",
    "YearRecord",
    "SpeciesYearRecord",
    "SpeciesSummary",
    "yearly_frame",
    "species_frame",
    "summary_frame",
    "results_to_csv",
    "default_biomass_kg",
    "make_biomass_fn",
    "evaluate_expression",
    "parse_expression",
    "ExpressionError",
    "build_schedule",
    "scheduled_total_area",
    "ResolvedSpecies",
    "resolve_species",
    "run_projection",
    "calculate",
    "validate_inputs",
    "species_from_table",
    "species_table",
    "biomass_kg_to_co2e_tonnes",
    "density_from_spacing",
    "spacing_from_density",
]
