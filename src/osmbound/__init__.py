"""
osmbound: download OpenStreetMap administrative boundaries as GeoJSON.
"""

__version__ = "0.1.0"
