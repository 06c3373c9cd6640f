"""
Seismic comparison against the USGS earthquake catalogue.

USGS energy-magnitude relation: log10(E) = 1.5*M + 4.8 (E in J).
Only a fraction eta of the impact energy is radiated as seismic waves:
rock/continent 1e-3, soft sediments 3e-4, ocean/depth 1e-4.
"""
from __future__ import annotations
from dataclasses import dataclass
from math import log10
from typing import Any, Dict, List, Optional

import httpx

USGS_EVENT_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"
COUPLING_ROCK = 1e-3
COUPLING_SEDIMENT = 3e-4
COUPLING_OCEAN = 1e-4
COUPLING_BY_TARGET = {"rock": COUPLING_ROCK, "sediment": COUPLING_SEDIMENT, "ocean": COUPLING_OCEAN}
MIN_FELT_MAGNITUDE = 2.0


@dataclass(frozen=True)
class Earthquake:
    id: str
    place: Optional[str]
    time: Optional[int]          # epoch ms, as USGS reports it
    magnitude: Optional[float]
    url: Optional[str]
    energy_j: Optional[float]


def energy_to_magnitude(energy_j: float, coupling: float = COUPLING_ROCK) -> Optional[float]:
    """Equivalent moment magnitude Mw of an impact releasing energy_j; None if energy_j <= 0."""
    if not energy_j or energy_j <= 0.0:
        return None
    return (log10(energy_j * coupling) - 4.8) / 1.5


def magnitude_to_energy(magnitude: float) -> float:
    return 10.0 ** (1.5 * magnitude + 4.8)


def _parse_feature(f: Dict[str, Any]) -> Earthquake:
    props = f.get("properties") or {}
    mag = props.get("mag")
    return Earthquake(
        id=str(f.get("id", "")),
        place=props.get("place"),
        time=props.get("time"),
        magnitude=mag,
        url=props.get("url"),
        energy_j=magnitude_to_energy(mag) if mag is not None else None,
    )


def find_similar_earthquakes(magnitude: Optional[float], tolerance: float = 0.2, limit: int = 5,
                             client: Optional[httpx.Client] = None,
                             url: str = USGS_EVENT_URL, timeout_s: float = 10.0) -> List[Earthquake]:
    """
    Largest catalogue events within +/- tolerance of magnitude.
    Lookup failures are not fatal: any HTTP or payload error gives [].
    """
    if magnitude is None:
        return []
    params = {
        "format": "geojson",
        "minmagnitude": max(0.0, magnitude - tolerance),
        "maxmagnitude": magnitude + tolerance,
        "orderby": "magnitude",
        "limit": limit,
    }
    print(f"[usgs] GET {url} params={params}")
    own_client = client is None
    http = client or httpx.Client(timeout=timeout_s)
    try:
        r = http.get(url, params=params)
        print(f"[usgs] status={r.status_code}")
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        print(f"[usgs.error] {e}")
        return []
    finally:
        if own_client:
            http.close()

    features = data.get("features") if isinstance(data, dict) else None
    if not features:
        return []
    quakes = [_parse_feature(f) for f in features]
    print(f"[usgs] matched={len(quakes)}")
    return quakes
