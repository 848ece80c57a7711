import json
from unittest.mock import MagicMock

import pytest

from osmbound.config.countries import CountryCatalog


def make_point(lat, lon):
    return {"lat": lat, "lon": lon}


def make_relation(element_id, members, tags=None):
    return {
        "type": "relation",
        "id": element_id,
        "tags": tags if tags is not None else {"name": f"Area {element_id}", "admin_level": "4"},
        "members": members,
    }


def make_member(role, points, ref=1, member_type="way"):
    return {"type": member_type, "ref": ref, "role": role, "geometry": points}


@pytest.fixture
def catalog():
    """Small catalog with two countries sharing part of their name."""
    return CountryCatalog.from_records([
        {"country": "http://www.wikidata.org/entity/Q142", "countryLabel": "France",
         "countryID": "http://www.wikidata.org/entity/Q142"},
        {"country": "http://www.wikidata.org/entity/Q183", "countryLabel": "Germany",
         "countryID": "http://www.wikidata.org/entity/Q183"},
        {"country": "http://www.wikidata.org/entity/Q30", "countryLabel": "United States of America",
         "countryID": "http://www.wikidata.org/entity/Q30"},
        {"country": "http://www.wikidata.org/entity/Q1006", "countryLabel": "Guinea",
         "countryID": "http://www.wikidata.org/entity/Q1006"},
        {"country": "http://www.wikidata.org/entity/Q691", "countryLabel": "Papua New Guinea",
         "countryID": "http://www.wikidata.org/entity/Q691"},
    ])


@pytest.fixture
def overpass_payload():
    """Two relations with outer geometry, one with inner only, and a node."""
    return {
        "version": 0.6,
        "elements": [
            make_relation(1, [
                make_member("outer", [make_point(10, 20), make_point(11, 20), make_point(11, 21)]),
                make_member("inner", [make_point(10.5, 20.5), make_point(10.6, 20.6)], ref=2),
            ], tags={"name": "North", "admin_level": "4", "wikidata": "Q1"}),
            make_relation(2, [
                make_member("inner", [make_point(1, 1), make_point(2, 2)]),
            ]),
            make_relation(3, [
                make_member("outer", [make_point(0, 0), make_point(0, 1), make_point(1, 1), make_point(0, 0)]),
            ], tags={"name": "South"}),
            {"type": "node", "id": 99, "lat": 1.0, "lon": 2.0},
        ],
    }


@pytest.fixture
def mock_http_response():
    """Factory for a requests.Response stand-in usable as a context manager."""
    def factory(status_code=200, body=b"", reason="OK"):
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        response.content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        return response
    return factory


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host settings out of the tests."""
    for var in ("OVERPASS_URL", "OVERPASS_QUERY_TIMEOUT", "OVERPASS_HTTP_TIMEOUT",
                "OSMBOUND_OUTPUT_ROOT", "OSMBOUND_COUNTRY_LIST", "ENVIRONMENT"):
        monkeypatch.delenv(var, raising=False)
