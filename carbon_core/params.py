# MIT License
"""Input models for the carbon projection engine.

All models are defined using [`pydantic.BaseModel`](https://pydantic-docs.helpmanual.io/)
to provide type checking and JSON serialisation.  The engine itself is
permissive: out-of-range numbers are coerced to safe values when the
calculation runs rather than rejected here, so a half-filled form can
still be stored, exported and re-imported.  Human-readable pre-flight
checks live in :mod:`carbon_core.validation`.

The top-level :class:`CalculatorInputs` groups the project parameters,
the planting schedule settings and the species rows.
"""
from __future__ import annotations
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field
from pydantic import field_validator

Region = Literal["dry", "moist"]
DensityMode = Literal["spacing", "density"]
ScheduleMode = Literal["constant", "custom"]


class ProjectParameters(BaseModel):
    """Time horizon and global policy of a projection run.

    Attributes
    ----------
    planting_year:
        First modelled year; cohorts are aged relative to it.
    crediting_end_year:
        Last modelled year (inclusive).
    project_area_ha:
        Full project area, planted at once when no schedule is used.
    mortality_rate:
        Annual mortality as a fraction (0–1).  Ignored unless
        `consider_mortality` is set.
    """

    planting_year: int = Field(2025, description="Year the first cohort is planted.")
    crediting_end_year: int = Field(2045, description="Last year of the crediting period (inclusive).")
    project_area_ha: float = Field(0.0, description="Total project area (ha) used when no schedule is enabled.")
    mortality_rate: float = Field(0.0, description="Annual mortality fraction (0–1).")
    consider_mortality: bool = Field(True, description="Apply `mortality_rate` to surviving trees.")
    default_growth_rate_cm_per_year: float = Field(
        0.2, description="Diameter growth (cm/yr) for species without their own rate."
    )
    force_year_zero_to_zero: bool = Field(
        True, description="Cohorts contribute no biomass or credits in their planting year."
    )


class ScheduleParams(BaseModel):
    """Settings for staggered planting over several years."""

    enabled: bool = Field(False, description="Plant over several years instead of all at once.")
    mode: ScheduleMode = Field("custom", description="'constant' area every year or 'custom' area per year.")
    schedule_years: int = Field(5, description="Number of consecutive planting years (clamped to 0–200).")
    constant_area_ha: Optional[float] = Field(None, description="Area planted each year in 'constant' mode (ha).")
    custom_areas_ha: Dict[int, float] = Field(
        default_factory=dict, description="Area planted per calendar year in 'custom' mode (ha)."
    )


class ScheduleEntry(BaseModel):
    """One planting cohort year: trees planted in `year` over `area_ha`."""

    year: int
    area_ha: float = Field(0.0, ge=0.0)


class SpeciesDefinition(BaseModel):
    """A species / stratum row.

    Density is given either directly or through the planting spacing,
    depending on `input_mode`.  When `use_custom_equation` is set the
    `custom_equation` (an expression in ``D``, the DBH in cm) replaces the
    regional allometry wherever it evaluates to a valid number.
    """

    name: str = Field("", description="Species name, unique within a calculation.")
    region: Region = Field("dry", description="Selects the default allometric equation.")
    area_share_percent: Optional[float] = Field(
        None, description="Share (%) of each cohort's planted area; empty until entered, 0 keeps the row out of the run."
    )
    input_mode: DensityMode = Field("spacing", description="How density is specified.")
    spacing_m: Optional[float] = Field(None, description="Square planting spacing (m).")
    density_trees_per_ha: Optional[float] = Field(None, description="Planting density (trees/ha).")
    growth_rate_cm_per_year: Optional[float] = Field(
        None, description="Diameter growth (cm/yr); project default is used when missing or non-positive."
    )
    initial_diameter_cm: float = Field(0.0, description="DBH at planting (cm).")
    use_custom_equation: bool = Field(False, description="Use `custom_equation` for biomass.")
    custom_equation: Optional[str] = Field(None, description="Biomass (kg) as an expression of D, e.g. exp(-1.996 + 2.32*ln(D)).")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return v.strip()


class CalculatorInputs(BaseModel):
    """A complete calculator configuration.

    This is the unit that is validated, hashed, exported as JSON and
    stored in presets.
    """

    project: ProjectParameters = Field(default_factory=lambda: ProjectParameters())
    schedule: ScheduleParams = Field(default_factory=lambda: ScheduleParams())
    species: List[SpeciesDefinition] = Field(default_factory=list)
