"""Core Layer — pure validation and authorization rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (slug suffix randomness lives in services/)

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate store
      calls around these rules
"""
