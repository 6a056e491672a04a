"""Infrastructure Layer — database sessions, credentials, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver and library exceptions mapped to typed errors before leaving this layer
"""
