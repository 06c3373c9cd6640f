from __future__ import annotations
from dataclasses import dataclass
from math import pi, exp, sqrt

# -----------------------------
# Physical constants & defaults
# -----------------------------
G_EARTH = 9.81                   # m/s^2
V_ESCAPE_EARTH_KMS = 11.2        # km/s, surface escape speed
RHO0 = 1.225                     # kg/m^3, sea-level reference density
H_SCALE = 7200.0                 # m, exponential atmosphere scale height
H_ENTRY = 100_000.0              # m, top-of-atmosphere reference altitude
J_PER_MT_TNT = 4.184e15          # J in 1 megaton TNT

# Below this v_inf the input is taken as the entry speed itself (re-entering
# hardware, controlled descents); above it the body is on a hyperbolic approach.
V_DIRECT_ENTRY_KMS = 3.0
V_INFINITY_FLOOR_KMS = 5.0


@dataclass(frozen=True)
class MaterialPreset:
    name: str
    density_kgpm3: float
    strength_pa: float  # dynamic pressure at which the body breaks up


MATERIAL_PRESETS = {
    "stony": MaterialPreset("stony", 3000.0, 2e5),
    "iron":  MaterialPreset("iron", 7800.0, 2e6),
    "comet": MaterialPreset("comet", 1000.0, 1e5),
}


@dataclass(frozen=True)
class BodyProperties:
    diameter_m: float
    mass_kg: float
    area_m2: float
    density_kgpm3: float
    strength_pa: float
    material: str


@dataclass(frozen=True)
class EntryConditions:
    velocity_mps: float    # at H_ENTRY
    v_infinity_kms: float  # as supplied by the caller
    angle_deg: float       # to HORIZONTAL


def get_material(material: MaterialPreset | str) -> MaterialPreset:
    if isinstance(material, MaterialPreset):
        return material
    key = str(material).lower()
    if key not in MATERIAL_PRESETS:
        raise ValueError(f"Unknown material '{material}'.")
    return MATERIAL_PRESETS[key]


def material_for_density(density_kgpm3: float) -> MaterialPreset:
    """Pick a breakup strength for a bare bulk density (kg/m^3)."""
    if density_kgpm3 < 1500.0:
        return MaterialPreset("Cometary (ice)", density_kgpm3, 1e5)
    if density_kgpm3 > 5000.0:
        return MaterialPreset("Metallic", density_kgpm3, 2e6)
    return MaterialPreset("Rocky", density_kgpm3, 2e5)


# ---------- Atmosphere ----------
def air_density(altitude_m: float) -> float:
    """Exponential atmosphere: rho(h) = RHO0 * exp(-h/H_SCALE), clamped to RHO0 below ground."""
    if altitude_m < 0.0:
        return RHO0
    return RHO0 * exp(-altitude_m / H_SCALE)


def dynamic_pressure(rho_kgpm3: float, velocity_mps: float) -> float:
    return 0.5 * rho_kgpm3 * velocity_mps * velocity_mps


def kinetic_energy_mt(mass_kg: float, velocity_mps: float) -> float:
    return 0.5 * mass_kg * velocity_mps * velocity_mps / J_PER_MT_TNT


# ---------- Body & entry ----------
def body_properties(diameter_m: float, material: MaterialPreset | str) -> BodyProperties:
    """
    Sphere of the given diameter. Caller guarantees diameter_m > 0 and a positive density.
    """
    mat = get_material(material)
    r = 0.5 * diameter_m
    area = pi * r * r
    volume = (4.0 / 3.0) * pi * r**3
    return BodyProperties(
        diameter_m=diameter_m,
        mass_kg=mat.density_kgpm3 * volume,
        area_m2=area,
        density_kgpm3=mat.density_kgpm3,
        strength_pa=mat.strength_pa,
        material=mat.name or "custom",
    )


def entry_conditions(v_infinity_kms: float, angle_deg: float = 45.0) -> EntryConditions:
    """
    Speed at H_ENTRY from the hyperbolic excess speed.
    v_inf < 3 km/s is passed through, otherwise v = sqrt(v_inf^2 + v_esc^2).
    """
    if v_infinity_kms < V_DIRECT_ENTRY_KMS:
        v_entry = v_infinity_kms
    else:
        v_entry = sqrt(v_infinity_kms**2 + V_ESCAPE_EARTH_KMS**2)
    return EntryConditions(velocity_mps=v_entry * 1000.0, v_infinity_kms=v_infinity_kms, angle_deg=angle_deg)


def v_infinity_from_speed(speed_mps: float) -> float:
    """Approximate v_inf (km/s) for a body known only by its relative speed."""
    v_kms = speed_mps / 1000.0
    if v_kms < V_DIRECT_ENTRY_KMS:
        return v_kms
    return max(V_INFINITY_FLOOR_KMS, sqrt(max(0.0, v_kms**2 - V_ESCAPE_EARTH_KMS**2)))
