"""Tests for the calculator page's table and form conversions.

These tests feed DataFrames shaped like Streamlit's data editor output
(empty cells as NaN/None) through the parsing helpers, without starting
a Streamlit server.
"""

import math

import pandas as pd
import pytest
from pydantic import ValidationError

from carbon_core.editor import (
    SPECIES_COLUMNS,
    clean_cell,
    custom_areas_from_table,
    project_from_form,
    schedule_table,
    species_from_table,
    species_table,
)
from carbon_core.params import CalculatorInputs, ProjectParameters, ScheduleParams, SpeciesDefinition
from carbon_core.validation import validate_inputs


def test_clean_cell():
    assert clean_cell(None) is None
    assert clean_cell(float("nan")) is None
    assert clean_cell(0.0) == 0.0
    assert clean_cell("") == ""


def test_species_table_has_one_blank_row_when_empty():
    df = species_table([])
    assert list(df.columns) == SPECIES_COLUMNS
    assert len(df) == 1


def test_species_from_table_empty_cells():
    df = pd.DataFrame(
        [
            {"name": "A", "region": "moist", "area_share_percent": 40.0, "input_mode": "density",
             "spacing_m": float("nan"), "density_trees_per_ha": 625.0, "growth_rate_cm_per_year": float("nan"),
             "initial_diameter_cm": float("nan"), "use_custom_equation": None, "custom_equation": None},
            {"name": None, "region": None, "area_share_percent": float("nan"), "input_mode": None,
             "spacing_m": 3.0, "density_trees_per_ha": float("nan"), "growth_rate_cm_per_year": 0.5,
             "initial_diameter_cm": 1.0, "use_custom_equation": True, "custom_equation": "2*D"},
        ],
        columns=SPECIES_COLUMNS,
    )
    a, b = species_from_table(df)
    assert a.region == "moist" and a.input_mode == "density"
    assert a.spacing_m is None and a.growth_rate_cm_per_year is None
    assert a.initial_diameter_cm == 0.0 and a.use_custom_equation is False
    assert b.name == "" and b.region == "dry" and b.input_mode == "spacing"
    assert b.area_share_percent is None
    assert b.use_custom_equation is True and b.custom_equation == "2*D"


def test_species_from_table_keeps_zero_share():
    df = species_table([SpeciesDefinition(name="A", area_share_percent=0.0, spacing_m=3)])
    (sp,) = species_from_table(df)
    assert sp.area_share_percent == 0.0


def test_species_table_roundtrip():
    species = [
        SpeciesDefinition(name="A", area_share_percent=50, spacing_m=3, growth_rate_cm_per_year=0.4),
        SpeciesDefinition(name="B", region="moist", area_share_percent=30, input_mode="density",
                          density_trees_per_ha=400, use_custom_equation=True, custom_equation="0.2*pow(D,2.2)"),
    ]
    assert species_from_table(species_table(species)) == species


def test_species_from_table_rejects_unknown_region():
    df = species_table([SpeciesDefinition(name="A")])
    df.loc[0, "region"] = "tropical"
    with pytest.raises(ValidationError):
        species_from_table(df)


def test_schedule_table_and_custom_areas():
    schedule = ScheduleParams(enabled=True, mode="custom", schedule_years=3, custom_areas_ha={2025: 2.0, 2027: 5.0})
    table = schedule_table(2025, schedule)
    assert list(table["year"]) == [2025, 2026, 2027]
    assert custom_areas_from_table(table) == {2025: 2.0, 2027: 5.0}
    table.loc[1, "area_ha"] = 0.0
    assert custom_areas_from_table(table) == {2025: 2.0, 2026: 0.0, 2027: 5.0}


def test_empty_schedule_cell_is_reported_by_validation():
    schedule = ScheduleParams(enabled=True, mode="custom", schedule_years=2)
    table = schedule_table(2025, schedule)
    table.loc[0, "area_ha"] = 3.0
    schedule.custom_areas_ha = custom_areas_from_table(table)
    inputs = CalculatorInputs(
        project=ProjectParameters(planting_year=2025, crediting_end_year=2030),
        schedule=schedule,
        species=[SpeciesDefinition(name="A", area_share_percent=100, spacing_m=3)],
    )
    assert validate_inputs(inputs) == "Enter non-negative area (ha) for each schedule year."


def test_project_from_form_converts_mortality_percent():
    base = ProjectParameters()
    project = project_from_form(
        base,
        project_area_ha=12,
        planting_year=2030,
        crediting_end_year=2050,
        consider_mortality=False,
        mortality_percent=12.5,
        default_growth_rate_cm_per_year=0.8,
        force_year_zero_to_zero=False,
    )
    assert math.isclose(project.mortality_rate, 0.125)
    assert project.project_area_ha == 12.0
    assert (project.planting_year, project.crediting_end_year) == (2030, 2050)
    assert project.consider_mortality is False and project.force_year_zero_to_zero is False
    assert project.default_growth_rate_cm_per_year == 0.8
    assert base.mortality_rate == 0.0
