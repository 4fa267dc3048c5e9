"""API Layer — FastAPI routes, request pipeline and error normalization.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All /api endpoints return JSON; errors always use the {"error": message} envelope

Design Decisions:
    - Thin routes delegate to the ProductRepository (core does the work)
"""
