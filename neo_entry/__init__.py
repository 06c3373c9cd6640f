"""Atmospheric entry, breakup and airburst kernel for near-Earth objects."""
from .atmosphere import (
    MATERIAL_PRESETS, MaterialPreset, BodyProperties, EntryConditions,
    air_density, dynamic_pressure, body_properties, entry_conditions,
    get_material, material_for_density, v_infinity_from_speed,
)
from .trajectory import (
    IntegrationOptions, TrajectoryState, ImpactSummary, TrajectoryResult, Termination,
    integrate_trajectory,
)
from .blast import (
    BlastEffects, ImpactZone, estimate_blast_effects, classify_outcome, crater_radius_km, ground_impact_zones,
)
from .scenario import SCENARIO_PRESETS, ScenarioAssessment, assess_scenario, assess_preset

__all__ = [
    "MATERIAL_PRESETS", "MaterialPreset", "BodyProperties", "EntryConditions",
    "air_density", "dynamic_pressure", "body_properties", "entry_conditions",
    "get_material", "material_for_density", "v_infinity_from_speed",
    "IntegrationOptions", "TrajectoryState", "ImpactSummary", "TrajectoryResult", "Termination",
    "integrate_trajectory",
    "BlastEffects", "ImpactZone", "estimate_blast_effects", "classify_outcome", "crater_radius_km",
    "ground_impact_zones",
    "SCENARIO_PRESETS", "ScenarioAssessment", "assess_scenario", "assess_preset",
]
