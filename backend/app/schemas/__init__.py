"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas shape what leaves the system boundary (JSON responses)
    - Wire names (inStock) set by alias; Python code uses snake_case

Design Decisions:
    - Separate from core entities: schemas are API contracts, core/product.py is the domain
"""
