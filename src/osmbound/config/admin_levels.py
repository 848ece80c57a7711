"""
OSM administrative levels offered for selection.

Lower numbers are coarser subdivisions. The meaning of each level varies by
country; the labels are the common interpretation.
"""

ADMIN_LEVELS: dict[int, str] = {
    2: "Countries",
    3: "First-level (states, provinces)",
    4: "Second-level (regions, counties)",
    5: "Third-level (districts)",
    6: "Fourth-level (municipalities)",
    7: "Fifth-level (wards, neighborhoods)",
    8: "Sixth-level (villages, sub-districts)",
    9: "Seventh-level (quarters, hamlets)",
    10: "Eighth-level (city blocks)",
}

DEFAULT_ADMIN_LEVEL = 8
