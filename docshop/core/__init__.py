"""
Core utilities shared across the docshop backend.

This package hosts:
- configuration helpers (env vars, paths, seed credentials)
- cross-cutting services such as logging setup, password hashing and
  the human-readable code generators used for accounts and activations.

Services should depend on these primitives instead of reading os.environ or
calling hashing libraries directly.
"""
