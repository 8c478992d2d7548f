"""
Integration tests.

These tests talk to a live Redis and are skipped unless USE_REAL_REDIS=1.
REDIS_URL and REDIS_TOKEN point them at the server.
"""
