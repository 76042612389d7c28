"""Turf Talent marketplace backend."""
