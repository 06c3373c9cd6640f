from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from math import sin, sqrt, radians
from typing import Union

from .atmosphere import (
    G_EARTH, H_ENTRY, BodyProperties, EntryConditions,
    air_density, dynamic_pressure, kinetic_energy_mt,
)

# --- Entry model constants ---
LAMBDA = 0.7                     # heat transfer coefficient
Q_ABLATION = 8e6                 # J/kg, effective heat of ablation
CD = 1.0                         # drag coefficient
V_ABLATION_ONSET = 3000.0        # m/s, no mass loss below this
V_BREAKUP_MIN = 1000.0           # m/s, no breakup (and no blast) below this
MIN_AIRBURST_ENERGY_MT = 1e-5    # 10 t TNT; smaller breakups release no blast
MIN_VELOCITY = 500.0             # m/s, Euler speed floor before terminal velocity
V_TERMINAL_CAP = 200.0           # m/s, realistic ceiling for falling meteorites
MAX_FLIGHT_TIME_S = 1800.0


@dataclass(frozen=True)
class IntegrationOptions:
    dt: float = 0.05
    lambda_: float = LAMBDA
    q_ablation: float = Q_ABLATION
    cd: float = CD
    fragmentation_multiplier: float = 3.0
    record_trajectory: bool = False
    record_interval: int = 10
    min_velocity: float = MIN_VELOCITY
    terminal_velocity_cap: float = V_TERMINAL_CAP
    max_flight_time_s: float = MAX_FLIGHT_TIME_S


# ---------- Flight regimes ----------
@dataclass(frozen=True)
class Intact:
    area_m2: float


@dataclass(frozen=True)
class Fragmented:
    area_m2: float                    # combined drag area of the fragment cloud
    breakup_altitude_m: float
    breakup_energy_mt: float | None   # None when below MIN_AIRBURST_ENERGY_MT


@dataclass(frozen=True)
class TerminalVelocity:
    area_m2: float
    speed_mps: float
    breakup: Fragmented | None = None


FlightRegime = Union[Intact, Fragmented, TerminalVelocity]


class Termination(str, Enum):
    GROUND_IMPACT = "ground_impact"
    COMPLETE_ABLATION = "complete_ablation"
    FLIGHT_TIME_EXCEEDED = "flight_time_exceeded"


def breakup_of(regime: FlightRegime) -> Fragmented | None:
    if isinstance(regime, Fragmented):
        return regime
    if isinstance(regime, TerminalVelocity):
        return regime.breakup
    return None


# ---------- Results ----------
@dataclass(frozen=True)
class TrajectoryState:
    time_s: float
    altitude_m: float
    velocity_mps: float
    mass_kg: float
    angle_rad: float
    dynamic_pressure_pa: float
    air_density_kgpm3: float
    fragmented: bool


@dataclass(frozen=True)
class ImpactSummary:
    altitude_m: float            # <= 0 means ground contact
    velocity_mps: float
    mass_kg: float
    mass_fraction: float
    airburst: bool
    airburst_altitude_m: float | None
    airburst_energy_mt: float | None
    ground_impact: bool
    impact_energy_mt: float
    termination: Termination
    flight_time_s: float


@dataclass(frozen=True)
class TrajectoryResult:
    trajectory: tuple[TrajectoryState, ...]
    impact: ImpactSummary


def _snapshot(t: float, h: float, v: float, m: float, gamma: float, regime: FlightRegime) -> TrajectoryState:
    rho = air_density(h)
    return TrajectoryState(
        time_s=t, altitude_m=h, velocity_mps=v, mass_kg=m, angle_rad=gamma,
        dynamic_pressure_pa=dynamic_pressure(rho, v), air_density_kgpm3=rho,
        fragmented=breakup_of(regime) is not None,
    )


def integrate_trajectory(entry: EntryConditions, body: BodyProperties,
                         options: IntegrationOptions | None = None) -> TrajectoryResult:
    """
    Forward-Euler descent from H_ENTRY with drag, the along-path gravity term,
    ablation and a single breakup event.

    Runs until the body reaches the ground, ablates away, or exceeds the
    flight-time cutoff. Never raises for inputs that satisfy the documented
    preconditions (diameter, density > 0; v_inf >= 0; 0 < angle <= 90).
    """
    opts = options or IntegrationOptions()
    dt = opts.dt

    t = 0.0
    h = H_ENTRY
    v = entry.velocity_mps
    m = body.mass_kg
    gamma = radians(entry.angle_deg)
    sin_g = sin(gamma)
    v_entry = v
    regime: FlightRegime = Intact(body.area_m2)
    termination = Termination.GROUND_IMPACT

    trajectory: list[TrajectoryState] = []
    if opts.record_trajectory:
        trajectory.append(_snapshot(t, h, v, m, gamma, regime))

    step = 0
    while h > 0.0:
        rho = air_density(h)
        q = dynamic_pressure(rho, v)

        if (isinstance(regime, Intact) and v > V_BREAKUP_MIN and v_entry > V_BREAKUP_MIN
                and q >= body.strength_pa):
            e_mt = kinetic_energy_mt(m, v)
            regime = Fragmented(
                area_m2=regime.area_m2 * opts.fragmentation_multiplier,
                breakup_altitude_m=h,
                breakup_energy_mt=e_mt if e_mt > MIN_AIRBURST_ENERGY_MT else None,
            )

        if not isinstance(regime, TerminalVelocity):
            A = regime.area_m2
            a_drag = -(opts.cd * A / (2.0 * m)) * rho * v * v
            a_grav = -G_EARTH * sin_g

            if v > V_ABLATION_ONSET:
                dmdt = -(opts.lambda_ * A / (2.0 * opts.q_ablation)) * rho * v**3
                m = max(0.0, m + dmdt * dt)

            v_new = v + (a_drag + a_grav) * dt
            if v_new < opts.min_velocity and rho > 0.0 and m > 0.0:
                v_t = sqrt((2.0 * m * G_EARTH) / (rho * opts.cd * A))
                v = min(v_t, opts.terminal_velocity_cap)
                regime = TerminalVelocity(area_m2=A, speed_mps=v, breakup=breakup_of(regime))
            else:
                v = max(0.0, v_new)
        else:
            v = regime.speed_mps

        h -= v * sin_g * dt
        t += dt

        if m <= 0.0:
            m = 0.0
            termination = Termination.COMPLETE_ABLATION
            break

        if opts.record_trajectory and step % opts.record_interval == 0:
            trajectory.append(_snapshot(t, h, v, m, gamma, regime))
        step += 1

        if h > 0.0 and t > opts.max_flight_time_s:
            termination = Termination.FLIGHT_TIME_EXCEEDED
            break

    if opts.record_trajectory:
        trajectory.append(_snapshot(t, h, v, m, gamma, regime))

    breakup = breakup_of(regime)
    burst_energy = breakup.breakup_energy_mt if breakup else None
    impact = ImpactSummary(
        altitude_m=h,
        velocity_mps=v,
        mass_kg=m,
        mass_fraction=m / body.mass_kg,
        airburst=breakup is not None and h > 0.0 and burst_energy is not None and burst_energy > 0.0,
        airburst_altitude_m=breakup.breakup_altitude_m if breakup else None,
        airburst_energy_mt=burst_energy,
        ground_impact=termination is Termination.GROUND_IMPACT,
        impact_energy_mt=kinetic_energy_mt(m, v),
        termination=termination,
        flight_time_s=t,
    )
    return TrajectoryResult(trajectory=tuple(trajectory), impact=impact)
