"""ORM Models — SQLAlchemy declarative models for every registry table.

Invariants:
    - All models inherit from Base (db/base.py)
    - Table names match the Table constants in core/domain_types.py

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before the row
      store resolves a table name or create_all runs
"""

from namebind.models.owner import Owner  # noqa: F401
from namebind.models.username_binding import UsernameBinding  # noqa: F401
from namebind.models.slug_binding import SlugBinding  # noqa: F401
from namebind.models.topic import Topic  # noqa: F401
from namebind.models.asset_version import AssetVersion  # noqa: F401
