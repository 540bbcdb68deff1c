"""Geospatial discovery engine for the Remnants marketplace map."""

__version__ = "0.1.0"
