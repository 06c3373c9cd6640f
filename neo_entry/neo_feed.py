from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from .atmosphere import v_infinity_from_speed

NEO_FEED_URL = "https://api.nasa.gov/neo/rest/v1/feed"
DEFAULT_MATERIAL = "stony"  # NeoWs carries no composition; assume chondritic rock
DEFAULT_ENTRY_ANGLE_DEG = 45.0


@dataclass(frozen=True)
class NeoCandidate:
    id: str
    name: str
    diameter_m: float     # mean of NeoWs min/max estimate
    speed_mps: Optional[float]
    hazardous: bool


def parse_neo(neo: Dict[str, Any]) -> NeoCandidate:
    d = (neo.get("estimated_diameter") or {}).get("meters") or {}
    d_min = float(d.get("estimated_diameter_min", 0.0))
    d_max = float(d.get("estimated_diameter_max", 0.0))

    speed = None
    cad = neo.get("close_approach_data") or []
    if cad:
        kph = (cad[0].get("relative_velocity") or {}).get("kilometers_per_hour")
        if kph:
            speed = float(kph) * 1000.0 / 3600.0

    return NeoCandidate(
        id=str(neo.get("id", "")),
        name=neo.get("name", "Unnamed NEO"),
        diameter_m=0.5 * (d_min + d_max),
        speed_mps=speed,
        hazardous=bool(neo.get("is_potentially_hazardous_asteroid", False)),
    )


def fetch_neo_feed(day: date, api_key: str = "DEMO_KEY", client: Optional[httpx.Client] = None,
                   url: str = NEO_FEED_URL, timeout_s: float = 10.0) -> List[NeoCandidate]:
    """
    All NEOs with a close approach on `day`, flattened across the feed's date buckets.
    HTTP failures propagate as httpx.HTTPError.
    """
    params = {"start_date": day.isoformat(), "end_date": day.isoformat(), "api_key": api_key}
    printable = dict(params, api_key=(api_key[:3] + "***") if api_key else api_key)
    print(f"[neows] GET {url} params={printable}")

    own_client = client is None
    http = client or httpx.Client(timeout=timeout_s)
    try:
        r = http.get(url, params=params)
        print(f"[neows] status={r.status_code}")
        r.raise_for_status()
        data = r.json()
    finally:
        if own_client:
            http.close()

    neos: List[NeoCandidate] = []
    for bucket in (data.get("near_earth_objects") or {}).values():
        if isinstance(bucket, list):
            neos.extend(parse_neo(n) for n in bucket)
    print(f"[neows] objects={len(neos)}")
    return neos


def scenario_inputs(neo: NeoCandidate, entry_angle_deg: float = DEFAULT_ENTRY_ANGLE_DEG) -> Optional[Dict[str, Any]]:
    """Kernel inputs (assess_scenario kwargs) for a feed object; None if it has no speed."""
    if neo.speed_mps is None or neo.diameter_m <= 0.0:
        return None
    return {
        "v_infinity_kms": v_infinity_from_speed(neo.speed_mps),
        "diameter_m": neo.diameter_m,
        "material": DEFAULT_MATERIAL,
        "entry_angle_deg": entry_angle_deg,
    }
