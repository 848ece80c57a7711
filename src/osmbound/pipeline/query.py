"""
Overpass QL query construction.

The country is resolved by its Wikidata identifier rather than by name, so
countries sharing a name cannot be confused. The country relation is turned into
a search area and every administrative boundary relation at exactly the requested
level inside it is returned with full member geometry.
"""

from urllib.parse import urlencode

QUERY_TEMPLATE = """[out:json][timeout:{timeout}];
relation["wikidata"="{country_code}"];
map_to_area->.country;
(
  relation(area.country)["boundary"="administrative"]["admin_level"="{admin_level}"];
);
out geom;"""


def build_query(country_code: str, admin_level: int, timeout: int = 90) -> str:
    """
    Build the Overpass QL query for one country and administrative level.

    The level is not range-checked; an unsupported level yields no elements.

    Args:
        country_code: Wikidata identifier of the country (e.g. 'Q30')
        admin_level: OSM admin_level value
        timeout: Server-side processing timeout in seconds

    Returns:
        Query string, not yet encoded
    """
    return QUERY_TEMPLATE.format(
        timeout=timeout,
        country_code=country_code,
        admin_level=admin_level,
    )


def encode_query(query: str) -> str:
    """Percent-encode the query as the interpreter's `data` parameter."""
    return urlencode({"data": query})


def build_request_url(endpoint: str, query: str) -> str:
    """Full GET URL for the interpreter endpoint."""
    return f"{endpoint}?{encode_query(query)}"
