# MIT License
from __future__ import annotations
import hashlib, json, math
from typing import Optional
from .params import CalculatorInputs

# Carbon fraction of dry biomass and the CO2/C molar mass ratio.
CARBON_FRACTION = 0.47
CO2_PER_C = 44 / 12
M2_PER_HA = 10_000.0


def inputs_hash(inputs: CalculatorInputs) -> str:
    """Compute a stable hash for a set of calculator inputs.

    Serialises the inputs to JSON (with sorted keys) and computes a
    SHA256 hash.  Used to tell whether stored results still match the
    inputs on screen.

    Parameters
    ----------
    inputs:
        CalculatorInputs instance.

    Returns
    -------
    str
        Hexadecimal string representation of the hash.
    """
    payload_json = inputs.model_dump(mode="json", exclude_none=True)
    # ensure deterministic key ordering
    payload = json.dumps(payload_json, sort_keys=True).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def finite_or(value: Optional[float], fallback: float) -> float:
    """Return `value` as a float, or `fallback` if it is missing or not finite."""
    if value is None:
        return fallback
    try:
        v = float(value)
    except (TypeError, ValueError):
        return fallback
    return v if math.isfinite(v) else fallback


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def kg_to_tonnes(kg: float) -> float:
    """Convert kilograms to metric tonnes."""
    return kg / 1000.0


def biomass_kg_to_co2e_tonnes(biomass_kg: float) -> float:
    """Convert dry biomass (kg) to sequestered CO₂-equivalent (t).

    biomass → carbon (×0.47) → CO₂ (×44/12) → tonnes (÷1000).
    """
    return kg_to_tonnes(biomass_kg * CARBON_FRACTION * CO2_PER_C)


def density_from_spacing(spacing_m: Optional[float]) -> float:
    """Trees per hectare for a square planting grid of `spacing_m` metres."""
    s = finite_or(spacing_m, 0.0)
    if s <= 0:
        return 0.0
    return M2_PER_HA / (s * s)


def spacing_from_density(density_trees_per_ha: Optional[float]) -> float:
    """Square-grid spacing (m) implied by a planting density."""
    d = finite_or(density_trees_per_ha, 0.0)
    if d <= 0:
        return 0.0
    return math.sqrt(M2_PER_HA / d)
