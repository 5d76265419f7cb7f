"""
High-level use cases for the Mini CRUD API.

Each service module orchestrates repositories to implement business rules
(validate and append a user, remove by position). Routers call these services
instead of manipulating the JSON file directly.
"""
