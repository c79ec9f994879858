# MIT License
"""Planting schedule construction.

A schedule lists, per planting year, the area planted that year.  Each
entry becomes one cohort in the projection.  Without scheduling the full
project area is planted in the planting year.
"""

from __future__ import annotations
from typing import List

from .params import ScheduleEntry, ScheduleParams
from .utils import clamp, finite_or

MAX_SCHEDULE_YEARS = 200


def schedule_length(schedule: ScheduleParams) -> int:
    """Number of planting years, clamped to [0, 200]."""
    return int(clamp(schedule.schedule_years, 0, MAX_SCHEDULE_YEARS))


def build_schedule(planting_year: int, schedule: ScheduleParams, project_area_ha: float = 0.0) -> List[ScheduleEntry]:
    """Build the ordered planting schedule.

    Parameters
    ----------
    planting_year:
        First planting year.
    schedule:
        Schedule settings.  When disabled, a single entry with the full
        project area is returned.
    project_area_ha:
        Area planted in `planting_year` when scheduling is disabled.

    Returns
    -------
    list of ScheduleEntry
        One entry per planting year.  Missing or invalid areas become 0;
        negative areas are floored at 0.  Total area is not checked
        against the project area.
    """
    if not schedule.enabled:
        return [ScheduleEntry(year=planting_year, area_ha=max(0.0, finite_or(project_area_ha, 0.0)))]
    entries = []
    for i in range(schedule_length(schedule)):
        y = planting_year + i
        if schedule.mode == "constant":
            area = finite_or(schedule.constant_area_ha, 0.0)
        else:
            area = finite_or(schedule.custom_areas_ha.get(y), 0.0)
        entries.append(ScheduleEntry(year=y, area_ha=max(0.0, area)))
    return entries


def scheduled_total_area(planting_year: int, schedule: ScheduleParams) -> float:
    """Total area across the schedule (ha), shown as a hint next to the inputs."""
    if not schedule.enabled:
        return 0.0
    return sum(e.area_ha for e in build_schedule(planting_year, schedule))
