"""Turfbook backend: turf discovery and review enrichment."""
