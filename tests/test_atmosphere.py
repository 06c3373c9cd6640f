"""Tests for the atmosphere and body model."""
import math

import pytest

from neo_entry.atmosphere import (
    H_SCALE,
    MATERIAL_PRESETS,
    RHO0,
    MaterialPreset,
    air_density,
    body_properties,
    dynamic_pressure,
    entry_conditions,
    get_material,
    kinetic_energy_mt,
    material_for_density,
    v_infinity_from_speed,
)


class TestAirDensity:

    def test_sea_level(self):
        assert air_density(0.0) == RHO0

    def test_below_ground_is_clamped(self):
        assert air_density(-500.0) == RHO0

    def test_one_scale_height(self):
        assert air_density(H_SCALE) == pytest.approx(RHO0 / math.e)

    def test_strictly_decreasing_with_altitude(self):
        altitudes = [0.0, 1.0, 500.0, 7200.0, 30_000.0, 80_000.0, 100_000.0]
        rhos = [air_density(h) for h in altitudes]
        assert all(a > b for a, b in zip(rhos, rhos[1:]))


class TestDynamicPressure:

    def test_half_rho_v_squared(self):
        assert dynamic_pressure(1.0, 10.0) == 50.0

    def test_zero_speed(self):
        assert dynamic_pressure(RHO0, 0.0) == 0.0


class TestMaterials:

    def test_canonical_presets(self):
        assert MATERIAL_PRESETS["stony"].density_kgpm3 == 3000.0
        assert MATERIAL_PRESETS["stony"].strength_pa == 2e5
        assert MATERIAL_PRESETS["iron"].density_kgpm3 == 7800.0
        assert MATERIAL_PRESETS["iron"].strength_pa == 2e6
        assert 800.0 <= MATERIAL_PRESETS["comet"].density_kgpm3 <= 1500.0
        assert MATERIAL_PRESETS["comet"].strength_pa == 1e5

    def test_lookup_is_case_insensitive(self):
        assert get_material("IRON") is MATERIAL_PRESETS["iron"]

    def test_preset_passes_through(self):
        custom = MaterialPreset("basalt", 2900.0, 5e5)
        assert get_material(custom) is custom

    def test_unknown_material(self):
        with pytest.raises(ValueError):
            get_material("granite")

    @pytest.mark.parametrize("density, strength", [(900.0, 1e5), (3300.0, 2e5), (7000.0, 2e6)])
    def test_material_for_density(self, density, strength):
        mat = material_for_density(density)
        assert mat.density_kgpm3 == density
        assert mat.strength_pa == strength


class TestBodyProperties:

    def test_sphere(self):
        body = body_properties(2.0, "stony")
        assert body.area_m2 == pytest.approx(math.pi)
        assert body.mass_kg == pytest.approx(3000.0 * 4.0 / 3.0 * math.pi)
        assert body.strength_pa == 2e5
        assert body.material == "stony"

    def test_mass_scales_with_cube_of_diameter(self):
        small = body_properties(10.0, "iron")
        large = body_properties(20.0, "iron")
        assert large.mass_kg == pytest.approx(8.0 * small.mass_kg)

    def test_custom_material_name(self):
        body = body_properties(5.0, MaterialPreset("", 2000.0, 1e5))
        assert body.material == "custom"


class TestEntryConditions:

    def test_low_speed_pass_through(self):
        entry = entry_conditions(2.0, 30.0)
        assert entry.velocity_mps == 2.0 * 1000.0
        assert entry.v_infinity_kms == 2.0
        assert entry.angle_deg == 30.0

    def test_hyperbolic_regime(self):
        entry = entry_conditions(15.0)
        assert entry.velocity_mps == math.sqrt(15.0**2 + 11.2**2) * 1000.0

    def test_threshold_is_hyperbolic(self):
        entry = entry_conditions(3.0)
        assert entry.velocity_mps == pytest.approx(math.sqrt(9.0 + 11.2**2) * 1000.0)

    def test_default_angle(self):
        assert entry_conditions(20.0).angle_deg == 45.0


class TestSpeedConversions:

    def test_v_infinity_low_speed(self):
        assert v_infinity_from_speed(2500.0) == pytest.approx(2.5)

    def test_v_infinity_floor(self):
        # sqrt(12^2 - 11.2^2) is about 4.3 km/s
        assert v_infinity_from_speed(12_000.0) == 5.0

    def test_v_infinity_hyperbolic(self):
        assert v_infinity_from_speed(20_000.0) == pytest.approx(math.sqrt(400.0 - 11.2**2))

    def test_kinetic_energy_megatons(self):
        assert kinetic_energy_mt(2.0, math.sqrt(4.184e15)) == pytest.approx(1.0)
