from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .atmosphere import (
    J_PER_MT_TNT, MaterialPreset, BodyProperties, EntryConditions,
    body_properties, entry_conditions, get_material,
)
from .blast import (
    BlastEffects, ImpactZone, estimate_blast_effects, classify_outcome, crater_radius_km, ground_impact_zones,
)
from .seismic import energy_to_magnitude, COUPLING_ROCK
from .trajectory import IntegrationOptions, TrajectoryResult, integrate_trajectory

SCENARIO_PRESETS: Dict[str, Dict[str, Any]] = {
    "tunguska":    {"name": "Tunguska (1908)",    "v_infinity_kms": 15.0, "diameter_m": 50.0,    "material": "stony", "entry_angle_deg": 45.0},
    "chelyabinsk": {"name": "Chelyabinsk (2013)", "v_infinity_kms": 18.0, "diameter_m": 20.0,    "material": "stony", "entry_angle_deg": 18.0},
    "small_iron":  {"name": "Small iron meteorite", "v_infinity_kms": 12.0, "diameter_m": 2.0,   "material": "iron",  "entry_angle_deg": 60.0},
    "large_comet": {"name": "Large comet",        "v_infinity_kms": 25.0, "diameter_m": 100.0,   "material": "comet", "entry_angle_deg": 30.0},
    "chicxulub":   {"name": "Chicxulub",          "v_infinity_kms": 20.0, "diameter_m": 10000.0, "material": "stony", "entry_angle_deg": 45.0},
}


@dataclass(frozen=True)
class ScenarioAssessment:
    input: Dict[str, Any]
    entry: EntryConditions
    body: BodyProperties
    trajectory: TrajectoryResult
    blast: Optional[BlastEffects]
    outcome: str
    crater_radius_km: float = 0.0
    seismic_magnitude: Optional[float] = None
    ground_zones: Tuple[ImpactZone, ...] = ()


def assess_scenario(v_infinity_kms: float, diameter_m: float,
                    material: MaterialPreset | str = "stony",
                    entry_angle_deg: float = 45.0,
                    options: Optional[IntegrationOptions] = None) -> ScenarioAssessment:
    """
    Entry -> body -> trajectory -> blast/outcome for one projectile.
    Pure: identical inputs give identical results.
    """
    mat = get_material(material)
    entry = entry_conditions(v_infinity_kms, entry_angle_deg)
    body = body_properties(diameter_m, mat)
    result = integrate_trajectory(entry, body, options)
    impact = result.impact

    blast = None
    if impact.airburst and impact.airburst_energy_mt:
        blast = estimate_blast_effects(impact.airburst_energy_mt, impact.airburst_altitude_m)

    # Ground footprint only for bodies that actually reach the surface
    crater_km = 0.0
    magnitude = None
    if impact.ground_impact and impact.mass_kg > 0.0:
        crater_km = crater_radius_km(impact.impact_energy_mt)
        magnitude = energy_to_magnitude(impact.impact_energy_mt * J_PER_MT_TNT, COUPLING_ROCK)

    return ScenarioAssessment(
        input={
            "v_infinity_kms": v_infinity_kms,
            "diameter_m": diameter_m,
            "material": material if isinstance(material, str) else "custom",
            "entry_angle_deg": entry_angle_deg,
        },
        entry=entry,
        body=body,
        trajectory=result,
        blast=blast,
        outcome=classify_outcome(impact),
        crater_radius_km=crater_km,
        seismic_magnitude=magnitude,
        ground_zones=ground_impact_zones(crater_km),
    )


def assess_preset(key: str, options: Optional[IntegrationOptions] = None) -> ScenarioAssessment:
    if key not in SCENARIO_PRESETS:
        raise ValueError(f"Unknown scenario preset '{key}'.")
    p = SCENARIO_PRESETS[key]
    return assess_scenario(p["v_infinity_kms"], p["diameter_m"], p["material"], p["entry_angle_deg"], options)
