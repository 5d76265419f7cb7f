"""
Core utilities shared across the Mini CRUD API.

This package hosts configuration helpers (env vars, data file path, log level)
and the JSON envelope used by every API response. Routers and services import
these primitives instead of reading os.environ directly.
"""
