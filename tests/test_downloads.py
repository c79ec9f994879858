"""Tests for download helpers, tables and presets.

These tests ensure that input serialisation, the results tables and the
CSV export are well formed, and that presets load (or fall back) as
expected.  They do not interact with Streamlit's download buttons.
"""

import json
import math

from carbon_core.config import list_presets, load_preset
from carbon_core.params import CalculatorInputs, ProjectParameters, ScheduleParams, SpeciesDefinition
from carbon_core.projection import calculate
from carbon_core.results import results_to_csv, species_frame, summary_frame, yearly_frame
from carbon_core.utils import inputs_hash


def _inputs() -> CalculatorInputs:
    return CalculatorInputs(
        project=ProjectParameters(planting_year=2025, crediting_end_year=2030, project_area_ha=5),
        schedule=ScheduleParams(enabled=True, mode="custom", schedule_years=2, custom_areas_ha={2025: 2.0, 2026: 3.0}),
        species=[
            SpeciesDefinition(name="A", area_share_percent=50, spacing_m=3, growth_rate_cm_per_year=1.0),
            SpeciesDefinition(name="B", region="moist", area_share_percent=50, input_mode="density",
                              density_trees_per_ha=400, use_custom_equation=True, custom_equation="0.2*pow(D,2.2)"),
        ],
    )


def test_inputs_json_roundtrip():
    inputs = _inputs()
    data = json.loads(inputs.model_dump_json())
    restored = CalculatorInputs.model_validate_json(json.dumps(data))
    assert restored == inputs
    assert restored.schedule.custom_areas_ha == {2025: 2.0, 2026: 3.0}


def test_inputs_hash_stable_and_sensitive():
    assert inputs_hash(_inputs()) == inputs_hash(_inputs())
    changed = _inputs()
    changed.project.mortality_rate = 0.1
    assert inputs_hash(changed) != inputs_hash(_inputs())


def test_results_csv_export():
    csv_str = results_to_csv(calculate(_inputs()))
    lines = csv_str.splitlines()
    assert lines[0] == "year,credits_t,biomass_kg,surviving_trees,cum_credits_t"
    assert len(lines) == 7


def test_frames():
    result = calculate(_inputs())
    df = yearly_frame(result)
    assert list(df["year"]) == list(range(2025, 2031))
    assert math.isclose(df["cum_credits_t"].iloc[-1], result.total_credits_t)

    sdf = species_frame(result)
    assert len(sdf) == 12
    assert list(sdf["species"].unique()) == ["A", "B"]
    last_a = sdf[sdf["species"] == "A"]["cum_credits_t"].iloc[-1]
    assert math.isclose(last_a, result.species_summary[0].total_credits_t)

    summary = summary_frame(result)
    assert math.isclose(summary["share_of_total"].sum(), 1.0)


def test_frames_for_empty_result():
    result = calculate(CalculatorInputs(project=ProjectParameters(planting_year=2030, crediting_end_year=2020)))
    assert yearly_frame(result).empty
    assert species_frame(result).empty
    assert summary_frame(result).empty
    assert results_to_csv(result).splitlines()[0].startswith("year,")


def test_presets_load():
    names = list_presets()
    assert "single_species_dry" in names
    for name in names:
        inputs = load_preset(name)
        assert inputs.species
        assert calculate(inputs).total_credits_t > 0


def test_missing_preset_falls_back_to_defaults(tmp_path):
    assert load_preset("does_not_exist") == CalculatorInputs()
    bad = tmp_path / "broken.json"
    bad.write_text("{not json", encoding="utf-8")
    assert load_preset("broken", preset_dir=tmp_path) == CalculatorInputs()
