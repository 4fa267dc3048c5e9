"""Services Layer — stateful implementations of core boundary protocols.

Invariants:
    - Services own their state; routes reach them only through dependencies

Design Decisions:
    - One file per store implementation for locality
"""
