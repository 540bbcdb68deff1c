"""Core services: configuration, logging, distance, and geocoding."""
