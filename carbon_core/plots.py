# MIT License
"""Plotly figure builders for the calculator dashboard.

Keeping the plotting code separate from the page logic keeps the
styling consistent across pages.
"""

from __future__ import annotations
import plotly.graph_objects as go

from .results import CalculationResult, species_frame, yearly_frame

TOTAL_COLOR = "rgb(64,145,108)"


def fig_credits(result: CalculationResult) -> go.Figure:
    """Create a line chart of annual CO₂e per species and in total.

    Parameters
    ----------
    result:
        Output of :func:`carbon_core.projection.calculate`.

    Returns
    -------
    plotly.graph_objects.Figure
        One filled trace for the total and one line per species.
    """
    df = yearly_frame(result)
    fig = go.Figure()
    fig.add_scatter(x=df["year"], y=df["credits_t"], mode="lines", name="Total CO₂e (t)",
                    line=dict(color=TOTAL_COLOR, width=2), fill="tozeroy")
    sdf = species_frame(result)
    n_species = len(result.species_summary)
    for idx in range(n_species):
        series = sdf.iloc[idx::n_species]
        fig.add_scatter(x=series["year"], y=series["credits_t"], mode="lines",
                        name=f"{result.species_summary[idx].name} (t)", line=dict(width=1.5))
    fig.update_layout(
        title="Projected CO₂e Over Time (per species & total)",
        xaxis_title="Year",
        yaxis_title="tCO₂e",
        yaxis_rangemode="tozero",
        hovermode="x unified",
        template="plotly_white",
    )
    return fig


def fig_cumulative_credits(result: CalculationResult) -> go.Figure:
    """Annual credits as bars with the running total as a line."""
    df = yearly_frame(result)
    fig = go.Figure()
    fig.add_bar(x=df["year"], y=df["credits_t"], name="Annual CO₂e (t)")
    fig.add_scatter(x=df["year"], y=df["cum_credits_t"], mode="lines+markers", name="Cumulative CO₂e (t)")
    fig.update_layout(
        title="Cumulative CO₂e",
        xaxis_title="Year",
        yaxis_title="tCO₂e",
        template="plotly_white",
    )
    return fig
