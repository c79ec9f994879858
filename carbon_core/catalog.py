# MIT License
"""Reference species used to prefill calculator rows.

Spacing and mortality are typical planting values, not site data; users
are expected to adjust them.
"""
from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .params import Region, SpeciesDefinition


class CatalogSpecies(BaseModel):
    key: str
    name: str
    scientific_name: str
    region: Region = "moist"
    optimal_spacing_m: float = Field(3.0, gt=0)
    mortality_rate: float = Field(0.15, ge=0.0, le=1.0, description="Typical annual mortality fraction.")
    native_regions: List[str] = Field(default_factory=list)
    description: str = ""


SPECIES_CATALOG: List[CatalogSpecies] = [
    CatalogSpecies(
        key="grevillea",
        name="Grevillea robusta",
        scientific_name="Grevillea robusta",
        optimal_spacing_m=3.0,
        mortality_rate=0.15,
        native_regions=["Australia"],
        description="Fast-growing tree with good timber value and soil improvement properties.",
    ),
    CatalogSpecies(
        key="eucalyptus",
        name="Eucalyptus",
        scientific_name="Eucalyptus spp.",
        optimal_spacing_m=3.0,
        mortality_rate=0.12,
        native_regions=["Australia", "Southeast Asia"],
        description="Fast-growing species with high carbon sequestration potential.",
    ),
    CatalogSpecies(
        key="black_wattle",
        name="Black Wattle",
        scientific_name="Acacia mearnsii",
        optimal_spacing_m=2.5,
        mortality_rate=0.18,
        native_regions=["Australia"],
        description="Nitrogen-fixing tree with good biomass production.",
    ),
    CatalogSpecies(
        key="markhamia",
        name="Markhamia",
        scientific_name="Markhamia lutea",
        optimal_spacing_m=4.0,
        mortality_rate=0.20,
        native_regions=["East Africa"],
        description="Indigenous tree with multiple uses and good adaptation.",
    ),
    CatalogSpecies(
        key="cordia",
        name="East African Cordia",
        scientific_name="Cordia africana",
        optimal_spacing_m=4.0,
        mortality_rate=0.17,
        native_regions=["East Africa", "Central Africa"],
        description="Valuable timber tree with good growth characteristics.",
    ),
]

_BY_KEY: Dict[str, CatalogSpecies] = {s.key: s for s in SPECIES_CATALOG}


def get_species(key: str) -> Optional[CatalogSpecies]:
    return _BY_KEY.get(key)


def species_row_from_catalog(key: str, area_share_percent: Optional[float] = None, region: Optional[Region] = None) -> SpeciesDefinition:
    """A calculator species row prefilled from the catalogue.

    Raises
    ------
    KeyError
        If `key` is not in the catalogue.
    """
    ref = _BY_KEY[key]
    return SpeciesDefinition(
        name=ref.name,
        region=region or ref.region,
        area_share_percent=area_share_percent,
        input_mode="spacing",
        spacing_m=ref.optimal_spacing_m,
    )


def catalog_caption(key: str) -> str:
    """One-line description of a catalogue species for the species picker.

    Mortality is a project-level setting, so the typical rate is shown
    here as guidance rather than copied into the species row.
    """
    ref = _BY_KEY[key]
    regions = ", ".join(ref.native_regions) or "unspecified"
    return (
        f"*{ref.scientific_name}* ({regions}). {ref.description} "
        f"Typical spacing {ref.optimal_spacing_m:g} m, mortality ~{ref.mortality_rate * 100:.0f}%/yr."
    )
