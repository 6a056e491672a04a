"""Services Layer — per-resource operations over an AsyncSession.

Invariants:
    - Every query is scoped by the authenticated user id
    - Existence is checked before ownership: missing rows → 404, foreign rows → 403
    - Services raise GymTrackerError subclasses, never HTTP exceptions

Design Decisions:
    - One service module per resource for locality
    - Plain async functions over classes: no state between calls besides the session
"""
