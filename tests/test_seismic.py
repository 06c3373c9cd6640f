"""Tests for the seismic magnitude conversion and USGS lookup."""
import httpx
import pytest

from neo_entry.seismic import (
    COUPLING_OCEAN,
    USGS_EVENT_URL,
    energy_to_magnitude,
    find_similar_earthquakes,
    magnitude_to_energy,
)

FEATURES = {
    "type": "FeatureCollection",
    "features": [
        {"id": "us7000abcd", "properties": {"mag": 4.9, "place": "10 km N of Somewhere", "time": 1700000000000,
                                            "url": "https://earthquake.usgs.gov/earthquakes/eventpage/us7000abcd"}},
        {"id": "ci4000efgh", "properties": {"mag": 4.7, "place": None, "time": None, "url": None}},
    ],
}


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestMagnitude:

    def test_rock_coupling(self):
        # 1e15 J * 1e-3 = 1e12 J radiated
        assert energy_to_magnitude(1e15) == pytest.approx(4.8)

    def test_ocean_coupling_is_weaker(self):
        assert energy_to_magnitude(1e15, COUPLING_OCEAN) == pytest.approx(4.8 - 2.0 / 3.0)

    @pytest.mark.parametrize("energy", [0.0, -1.0])
    def test_no_energy(self, energy):
        assert energy_to_magnitude(energy) is None

    def test_inverse(self):
        assert magnitude_to_energy(4.8) == pytest.approx(1e12)
        assert energy_to_magnitude(magnitude_to_energy(6.0), 1.0) == pytest.approx(6.0)


class TestFindSimilarEarthquakes:

    def test_query_and_parse(self):
        seen = {}

        def handler(request):
            seen["url"] = f"{request.url.scheme}://{request.url.host}{request.url.path}"
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=FEATURES)

        with _client(handler) as client:
            quakes = find_similar_earthquakes(4.8, tolerance=0.2, limit=2, client=client)

        assert seen["url"] == USGS_EVENT_URL
        assert seen["params"]["format"] == "geojson"
        assert float(seen["params"]["minmagnitude"]) == pytest.approx(4.6)
        assert float(seen["params"]["maxmagnitude"]) == pytest.approx(5.0)
        assert seen["params"]["orderby"] == "magnitude"
        assert seen["params"]["limit"] == "2"

        assert [q.id for q in quakes] == ["us7000abcd", "ci4000efgh"]
        assert quakes[0].magnitude == 4.9
        assert quakes[0].place == "10 km N of Somewhere"
        assert quakes[0].energy_j == pytest.approx(magnitude_to_energy(4.9))
        assert quakes[1].place is None

    def test_min_magnitude_floored_at_zero(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={"features": []})

        with _client(handler) as client:
            assert find_similar_earthquakes(0.1, tolerance=0.5, client=client) == []
        assert float(seen["minmagnitude"]) == 0.0

    def test_server_error_gives_empty(self):
        with _client(lambda request: httpx.Response(500, text="boom")) as client:
            assert find_similar_earthquakes(5.0, client=client) == []

    def test_bad_payload_gives_empty(self):
        with _client(lambda request: httpx.Response(200, text="not json")) as client:
            assert find_similar_earthquakes(5.0, client=client) == []

    def test_transport_error_gives_empty(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with _client(handler) as client:
            assert find_similar_earthquakes(5.0, client=client) == []

    def test_zero_magnitude_is_queried(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={"features": [
                {"id": "nc1", "properties": {"mag": 0.0, "place": "Geysers", "time": 1, "url": None}},
            ]})

        with _client(handler) as client:
            quakes = find_similar_earthquakes(0.0, tolerance=0.1, client=client)
        assert float(seen["maxmagnitude"]) == pytest.approx(0.1)
        assert quakes[0].magnitude == 0.0
        assert quakes[0].energy_j == pytest.approx(magnitude_to_energy(0.0))

    def test_no_magnitude_skips_request(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=FEATURES)

        with _client(handler) as client:
            assert find_similar_earthquakes(None, client=client) == []
        assert calls == []
