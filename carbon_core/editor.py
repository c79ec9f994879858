# MIT License
"""Conversions between the input models and the calculator page's widgets.

Streamlit's data editor hands back a DataFrame in which empty cells are
``NaN`` or ``None``; these helpers turn such tables into models and back
so the page itself only lays out widgets.
"""
from __future__ import annotations
import math
from typing import Any, Dict, List

import pandas as pd

from .params import ProjectParameters, ScheduleParams, SpeciesDefinition
from .schedule import schedule_length

SPECIES_COLUMNS = [
    "name", "region", "area_share_percent", "input_mode", "spacing_m", "density_trees_per_ha",
    "growth_rate_cm_per_year", "initial_diameter_cm", "use_custom_equation", "custom_equation",
]


def clean_cell(v: Any) -> Any:
    """Map an empty data-editor cell (NaN/None) to ``None``."""
    if v is None:
        return None
    if isinstance(v, float) and math.isnan(v):
        return None
    return v


def species_table(species: List[SpeciesDefinition]) -> pd.DataFrame:
    rows = [sp.model_dump() for sp in species] or [SpeciesDefinition().model_dump()]
    return pd.DataFrame(rows, columns=SPECIES_COLUMNS)


def species_from_table(df: pd.DataFrame) -> List[SpeciesDefinition]:
    """Parse the edited species table.

    Empty cells become ``None`` so validation can tell a missing share
    from an explicit 0 %.  Text and flag columns fall back to the model
    defaults.

    Raises
    ------
    pydantic.ValidationError
        If a cell holds a value of the wrong type (e.g. an unknown region).
    """
    species = []
    for rec in df.to_dict(orient="records"):
        data = {k: clean_cell(rec.get(k)) for k in SPECIES_COLUMNS}
        data["name"] = data["name"] or ""
        data["region"] = data["region"] or "dry"
        data["input_mode"] = data["input_mode"] or "spacing"
        data["initial_diameter_cm"] = data["initial_diameter_cm"] or 0.0
        data["use_custom_equation"] = bool(data["use_custom_equation"])
        species.append(SpeciesDefinition(**data))
    return species


def schedule_table(planting_year: int, schedule: ScheduleParams) -> pd.DataFrame:
    """One row per schedule year with the area entered so far (or empty)."""
    years = [planting_year + i for i in range(schedule_length(schedule))]
    return pd.DataFrame({"year": years, "area_ha": [schedule.custom_areas_ha.get(y) for y in years]})


def custom_areas_from_table(df: pd.DataFrame) -> Dict[int, float]:
    """Year -> area mapping from the edited schedule table; empty rows are left out."""
    return {
        int(r["year"]): float(r["area_ha"])
        for r in df.to_dict(orient="records")
        if clean_cell(r["area_ha"]) is not None
    }


def project_from_form(
    base: ProjectParameters,
    *,
    project_area_ha: float,
    planting_year: int,
    crediting_end_year: int,
    consider_mortality: bool,
    mortality_percent: float,
    default_growth_rate_cm_per_year: float,
    force_year_zero_to_zero: bool,
) -> ProjectParameters:
    """Project parameters from the form widgets; mortality is entered in %/yr."""
    return base.model_copy(update=dict(
        project_area_ha=float(project_area_ha),
        planting_year=int(planting_year),
        crediting_end_year=int(crediting_end_year),
        consider_mortality=bool(consider_mortality),
        mortality_rate=float(mortality_percent) / 100,
        default_growth_rate_cm_per_year=float(default_growth_rate_cm_per_year),
        force_year_zero_to_zero=bool(force_year_zero_to_zero),
    ))
