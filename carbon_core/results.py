# MIT License
"""Result models and tabular views of a projection.

:class:`CalculationResult` is what the engine returns.  The helpers in
this module flatten it into pandas DataFrames for the results page, the
charts and the CSV export.
"""

from __future__ import annotations
from typing import List, Optional
import numpy as np
import pandas as pd
from pydantic import BaseModel, Field


class SpeciesYearRecord(BaseModel):
    """Contribution of one species to one modelled year.

    `diameter_cm` is the diameter of the last cohort of this species
    processed that year; when cohorts of several ages coexist it is not
    an average.
    """

    name: str
    credits_t: float = 0.0
    biomass_kg: float = 0.0
    surviving_trees: float = 0.0
    diameter_cm: float = 0.0


class YearRecord(BaseModel):
    year: int
    credits_t: float = 0.0
    biomass_kg: float = 0.0
    surviving_trees: float = 0.0
    per_species: List[SpeciesYearRecord] = Field(default_factory=list)


class SpeciesSummary(BaseModel):
    name: str
    total_credits_t: float = 0.0


class CalculationResult(BaseModel):
    """Full output of a projection run."""

    yearly_breakdown: List[YearRecord] = Field(default_factory=list)
    total_credits_t: float = 0.0
    species_summary: List[SpeciesSummary] = Field(default_factory=list)

    @property
    def terminal_year(self) -> Optional[YearRecord]:
        return self.yearly_breakdown[-1] if self.yearly_breakdown else None

    @property
    def years_modeled(self) -> int:
        """Number of years after the planting year covered by the run."""
        return max(len(self.yearly_breakdown) - 1, 0)


YEARLY_COLUMNS = ["year", "credits_t", "biomass_kg", "surviving_trees", "cum_credits_t"]
SPECIES_COLUMNS = ["year", "species", "credits_t", "biomass_kg", "surviving_trees", "diameter_cm", "cum_credits_t"]


def yearly_frame(result: CalculationResult) -> pd.DataFrame:
    """Year-by-year totals.

    Returns
    -------
    pandas.DataFrame
        One row per modelled year with columns `year`, `credits_t`,
        `biomass_kg`, `surviving_trees` and the running `cum_credits_t`.
    """
    rows = [
        dict(year=r.year, credits_t=r.credits_t, biomass_kg=r.biomass_kg, surviving_trees=r.surviving_trees)
        for r in result.yearly_breakdown
    ]
    df = pd.DataFrame(rows, columns=YEARLY_COLUMNS[:-1])
    df["cum_credits_t"] = df["credits_t"].cumsum()
    return df


def species_frame(result: CalculationResult) -> pd.DataFrame:
    """Per-species breakdown in long format (one row per year and species).

    Rows keep the species input order inside each year; cumulative
    credits are computed per species by position so that two rows with
    the same name stay separate.
    """
    rows = []
    for r in result.yearly_breakdown:
        for idx, s in enumerate(r.per_species):
            rows.append(dict(year=r.year, species_idx=idx, species=s.name, credits_t=s.credits_t,
                             biomass_kg=s.biomass_kg, surviving_trees=s.surviving_trees,
                             diameter_cm=s.diameter_cm))
    df = pd.DataFrame(rows, columns=["year", "species_idx"] + SPECIES_COLUMNS[1:-1])
    df["cum_credits_t"] = df.groupby("species_idx")["credits_t"].cumsum()
    return df.drop(columns=["species_idx"])


def summary_frame(result: CalculationResult) -> pd.DataFrame:
    """Cumulative credits per species with their share of the total."""
    df = pd.DataFrame(
        [dict(species=s.name, total_credits_t=s.total_credits_t) for s in result.species_summary],
        columns=["species", "total_credits_t"],
    )
    total = result.total_credits_t
    df["share_of_total"] = np.where(total > 0, df["total_credits_t"] / max(total, 1e-12), 0.0)
    return df


def results_to_csv(result: CalculationResult) -> str:
    """Yearly totals as CSV text, ready for a download button."""
    return yearly_frame(result).to_csv(index=False)
