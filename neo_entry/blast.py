from __future__ import annotations
from dataclasses import dataclass
from math import exp

from .trajectory import ImpactSummary

# Collins et al. (2017), Eq. 7: peak overpressure (Pa) at range r (m) for a
# 1 kt burst at altitude z_b (m):
#   p(r) = P_COLLINS / ((R_COLLINS + r^2.5) * (1 + z_b/Z_COLLINS)^2)
P_COLLINS = 3.14e11
R_COLLINS = 2.5e5
Z_COLLINS = 6789.0
MIN_RANGE_KM = 0.01

# Damage thresholds (Pa), Glasstone & Dolan
P_WINDOW_BREAK = 2_000.0
P_STRUCTURAL_DAMAGE = 20_000.0
P_SEVERE_DESTRUCTION = 35_000.0
P_EXTREME_DESTRUCTION = 100_000.0

# Extra dissipation for high meteor airbursts (nuclear test data rarely goes above H_REF_KM)
H_REF_KM = 25.0
H_ATTEN_KM = 8.0
ATTEN_EXP = 0.6
WINDOW_CAP_KM = 300.0

CRATER_K = 1.8  # km per Mt^(1/3)

SEVERITY_LEVELS = ("none", "minor", "moderate", "significant", "major", "catastrophic")

# Ground-impact damage rings as multiples of the crater radius (EIEP-style display ladder)
GROUND_ZONE_FACTORS = (
    ("Transient crater", 0.3, "Rock vaporization and melting"),
    ("Final crater", 1.0, "Complete excavation, wall collapse"),
    ("Primary ejecta", 2.5, "Molten material and rock ejected at high velocity"),
    ("Secondary ejecta", 4.0, "Debris and dust, secondary craters"),
    ("Thermal radiation zone", 6.0, "Massive fires, ignition of combustible materials"),
    ("Atmospheric shock wave", 10.0, "Severe structural damage, winds above 200 km/h"),
    ("Seismic waves", 15.0, "Earthquakes, collapse of weak structures"),
)


@dataclass(frozen=True)
class BlastEffects:
    energy_mt: float
    altitude_m: float
    radius_window_break_km: float
    radius_structural_damage_km: float
    radius_severe_destruction_km: float
    radius_extreme_km: float
    severity: str


def overpressure_pa(r_m: float, energy_mt: float, altitude_m: float) -> float:
    """Yield-scaled Collins et al. overpressure at ground range r_m."""
    e_kt = energy_mt * 1000.0
    r_1kt = r_m / e_kt ** (1.0/3.0)
    p_1kt = P_COLLINS / ((R_COLLINS + r_1kt ** 2.5) * (1.0 + altitude_m / Z_COLLINS) ** 2)
    return p_1kt * e_kt ** (2.0/3.0)


def overpressure_range_km(p_target: float, energy_mt: float, altitude_m: float) -> float:
    """Ground range (km) at which the overpressure falls to p_target; no altitude attenuation."""
    if p_target <= 0.0:
        return 0.0
    e_kt = energy_mt * 1000.0
    alt_factor = (1.0 + altitude_m / Z_COLLINS) ** 2
    p_1kt = p_target / e_kt ** (2.0/3.0)

    denom = p_1kt * alt_factor
    if denom <= 0.0:
        return 0.0
    r_term = P_COLLINS / denom - R_COLLINS
    if r_term <= 0.0:
        return MIN_RANGE_KM

    r_1kt = r_term ** (1.0/2.5)
    return r_1kt * e_kt ** (1.0/3.0) / 1000.0


def altitude_attenuation(altitude_m: float) -> float:
    h_km = altitude_m / 1000.0
    if h_km <= H_REF_KM:
        return 1.0
    return exp(-((h_km - H_REF_KM) / H_ATTEN_KM) ** ATTEN_EXP)


def classify_severity(window_km: float, structural_km: float, severe_km: float) -> str:
    if severe_km > 10.0:
        return "catastrophic"
    if severe_km > 3.0:
        return "major"
    if structural_km > 10.0:
        return "significant"
    if window_km > 20.0:
        return "moderate"
    return "minor"


def estimate_blast_effects(energy_mt: float, altitude_m: float) -> BlastEffects:
    """
    Ground overpressure radii (km) for an airburst of energy_mt at altitude_m.
    Non-positive energy or altitude gives zero radii and severity 'none'.
    """
    if energy_mt <= 0.0 or altitude_m <= 0.0:
        return BlastEffects(energy_mt, altitude_m, 0.0, 0.0, 0.0, 0.0, "none")

    att = altitude_attenuation(altitude_m)
    window = overpressure_range_km(P_WINDOW_BREAK, energy_mt, altitude_m) * att
    structural = overpressure_range_km(P_STRUCTURAL_DAMAGE, energy_mt, altitude_m) * att
    severe = overpressure_range_km(P_SEVERE_DESTRUCTION, energy_mt, altitude_m) * att
    extreme = overpressure_range_km(P_EXTREME_DESTRUCTION, energy_mt, altitude_m) * att
    window = min(window, WINDOW_CAP_KM)

    return BlastEffects(
        energy_mt=energy_mt,
        altitude_m=altitude_m,
        radius_window_break_km=window,
        radius_structural_damage_km=structural,
        radius_severe_destruction_km=severe,
        radius_extreme_km=extreme,
        severity=classify_severity(window, structural, severe),
    )


def crater_radius_km(energy_mt: float) -> float:
    """Display-scale crater radius for a ground impact: 1.8 km * E_Mt^(1/3)."""
    if energy_mt <= 0.0:
        return 0.0
    return CRATER_K * energy_mt ** (1.0/3.0)


@dataclass(frozen=True)
class ImpactZone:
    label: str
    radius_km: float
    description: str


def ground_impact_zones(crater_km: float) -> tuple[ImpactZone, ...]:
    """Damage rings around a ground impact, innermost first; empty without a crater."""
    if crater_km <= 0.0:
        return ()
    return tuple(ImpactZone(label, k * crater_km, desc) for label, k, desc in GROUND_ZONE_FACTORS)


def classify_outcome(impact: ImpactSummary) -> str:
    if impact.mass_kg == 0.0:
        return "Complete ablation in atmosphere"
    if impact.airburst:
        return f"Airburst at {impact.airburst_altitude_m / 1000.0:.1f} km altitude"
    if impact.ground_impact:
        return (f"Ground impact at {impact.velocity_mps:.0f} m/s "
                f"with {impact.mass_fraction * 100.0:.1f}% of original mass")
    return "Decelerated to low velocity in atmosphere"
