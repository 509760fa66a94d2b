"""Geocoding, distance and waypoint-ordering on top of the mapping provider."""
