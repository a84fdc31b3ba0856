"""Services Layer — claim engine, slug registry, asset version manager.

Invariants:
    - Every component receives its RowStore at construction (no ambient client)
    - Each store call is a separate unit of work; services never open transactions

Design Decisions:
    - One file per component for locality
"""
