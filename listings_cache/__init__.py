"""Listings cache service: read-through caching in front of the listings store."""

__version__ = "1.0.0"
