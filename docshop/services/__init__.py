"""
High-level use cases for the docshop API.

Each service module orchestrates the JSON store to implement business rules
(register, place order, approve, activate, notifications, catalog uploads).

Routers (FastAPI endpoints) call these services instead of manipulating the
JSON document or tokens directly.
"""
