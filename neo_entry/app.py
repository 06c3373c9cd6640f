from fastapi import FastAPI, Depends, Query, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
import httpx
import os
from dataclasses import replace
from datetime import date
from dotenv import load_dotenv
from typing import Any, Dict, Iterator, List, Literal, Optional, Union

from .atmosphere import MATERIAL_PRESETS, MaterialPreset, material_for_density
from .blast import estimate_blast_effects
from .neo_feed import fetch_neo_feed, scenario_inputs
from .scenario import SCENARIO_PRESETS, assess_preset, assess_scenario
from .seismic import (
    USGS_EVENT_URL, COUPLING_ROCK, COUPLING_BY_TARGET, MIN_FELT_MAGNITUDE,
    energy_to_magnitude, find_similar_earthquakes,
)
from .trajectory import IntegrationOptions

app = FastAPI(title="NEO entry & airburst kernel", version="1.0.0")


def _http_timeout_s() -> float:
    load_dotenv()
    return float(os.getenv("HTTP_TIMEOUT_S", "10"))


def get_http_client() -> Iterator[httpx.Client]:
    with httpx.Client(timeout=_http_timeout_s()) as client:
        yield client


# -------------------------------
# Health + reference data
# -------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/materials")
def materials():
    return MATERIAL_PRESETS

@app.get("/scenarios/presets")
def scenario_presets():
    return SCENARIO_PRESETS


# -------------------------------
# Impact assessment endpoints
# -------------------------------

class MaterialIn(BaseModel):
    name: Optional[str] = Field(None, description="Label for the custom material; defaults to the inferred class when strength is omitted")
    density_kgpm3: float = Field(..., gt=0, description="Bulk density in kg/m^3")
    strength_pa: Optional[float] = Field(None, gt=0, description="Breakup strength in Pa; inferred from density if omitted")

    def to_preset(self) -> MaterialPreset:
        if self.strength_pa is None:
            inferred = material_for_density(self.density_kgpm3)
            return replace(inferred, name=self.name) if self.name else inferred
        return MaterialPreset(self.name or "custom", self.density_kgpm3, self.strength_pa)

class OptionsIn(BaseModel):
    dt: float = Field(0.05, gt=0, le=1.0, description="Integration step in s")
    lambda_: float = Field(0.7, gt=0, description="Heat transfer coefficient")
    q_ablation: float = Field(8e6, gt=0, description="Effective heat of ablation in J/kg")
    cd: float = Field(1.0, gt=0, description="Drag coefficient")
    fragmentation_multiplier: float = Field(3.0, ge=1.0)
    record_trajectory: bool = False
    record_interval: int = Field(10, ge=1)

    def to_options(self) -> IntegrationOptions:
        return IntegrationOptions(**self.model_dump())

class AssessRequest(BaseModel):
    v_infinity_kms: float = Field(..., ge=0, description="Hyperbolic excess speed in km/s")
    diameter_m: float = Field(..., gt=0, description="Projectile diameter in meters")
    material: Union[Literal["stony", "iron", "comet"], MaterialIn] = "stony"
    entry_angle_deg: float = Field(45.0, gt=0, le=90, description="Entry angle to horizontal in degrees")
    options: Optional[OptionsIn] = None

class BlastRequest(BaseModel):
    energy_mt: float = Field(..., description="Airburst energy in Mt TNT")
    altitude_m: float = Field(..., description="Burst altitude in m")

@app.post("/impact/assess")
def impact_assess(req: AssessRequest):
    material = req.material if isinstance(req.material, str) else req.material.to_preset()
    opts = req.options.to_options() if req.options else None
    print(f"[assess] v_inf={req.v_infinity_kms} d={req.diameter_m} material={material} angle={req.entry_angle_deg}")
    result = assess_scenario(req.v_infinity_kms, req.diameter_m, material, req.entry_angle_deg, opts)
    print(f"[assess.done] outcome={result.outcome!r}")
    return result

@app.get("/impact/presets/{key}")
def impact_preset(key: str):
    try:
        return assess_preset(key)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@app.post("/blast/estimate")
def blast_estimate(req: BlastRequest):
    return estimate_blast_effects(req.energy_mt, req.altitude_m)


# -------------------------------
# Collaborator lookups (USGS, NeoWs)
# -------------------------------
@app.get("/seismic/similar")
def seismic_similar(
    energy_j: float = Query(..., gt=0, description="Impact energy in joules"),
    coupling: float = Query(COUPLING_ROCK, gt=0, le=1, description="Seismic coupling factor eta"),
    target: Optional[Literal["rock", "sediment", "ocean"]] = Query(None, description="Target type; overrides coupling"),
    tolerance: float = Query(0.15, gt=0, le=2, description="Magnitude window half-width"),
    limit: int = Query(3, ge=1, le=50),
    client: httpx.Client = Depends(get_http_client),
):
    load_dotenv()
    url = os.getenv("USGS_EVENT_URL", USGS_EVENT_URL)
    if target is not None:
        coupling = COUPLING_BY_TARGET[target]
    magnitude = energy_to_magnitude(energy_j, coupling)
    quakes: List[Any] = []
    if magnitude is not None and magnitude >= MIN_FELT_MAGNITUDE:
        quakes = find_similar_earthquakes(magnitude, tolerance, limit, client=client, url=url)
    return {"magnitude": magnitude, "coupling": coupling, "earthquakes": quakes}

@app.get("/neo/today")
def neo_today(
    entry_angle_deg: float = Query(45.0, gt=0, le=90),
    client: httpx.Client = Depends(get_http_client),
):
    load_dotenv()
    api_key = os.getenv("NASA_API_KEY", "DEMO_KEY")
    try:
        neos = fetch_neo_feed(date.today(), api_key, client=client)
    except httpx.HTTPError as e:
        print(f"[neows.error] {e}")
        raise HTTPException(status_code=502, detail=f"Error fetching NeoWs feed: {e}")

    out: List[Dict[str, Any]] = []
    for neo in neos:
        inputs = scenario_inputs(neo, entry_angle_deg)
        if inputs is None:
            print(f"[neo.skip] id={neo.id} name={neo.name!r} (no speed/diameter)")
            continue
        result = assess_scenario(**inputs)
        impact = result.trajectory.impact
        out.append({
            "id": neo.id,
            "name": neo.name,
            "hazardous": neo.hazardous,
            "inputs": inputs,
            "outcome": result.outcome,
            "airburst": impact.airburst,
            "ground_impact": impact.ground_impact,
            "severity": result.blast.severity if result.blast else None,
        })
    return out


@app.exception_handler(ValueError)
def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})
