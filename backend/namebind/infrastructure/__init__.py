"""Infrastructure Layer — store client, row store adapter, logging setup.

Invariants:
    - Infrastructure never imports from services/
    - All SQLAlchemy failures are mapped to StoreError before leaving this layer
"""
