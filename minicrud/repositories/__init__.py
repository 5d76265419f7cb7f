"""
Persistence adapters.

These modules encapsulate how user records are stored/retrieved (today a JSON
array on disk). Services depend on these helpers rather than touching the file.
"""
