"""Core Layer — pure domain logic, no IO, no HTTP, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic (id generation is injected)

Design Decisions:
    - Functional core separated from imperative shell: validation, auth and
      query semantics are testable without a running app
"""
