"""Canteen bounded context — Catalog, Stock Ledger, Orders and Notifications.

Items are sold against finite stock. Orders are validated against the catalog
when placed and debit stock when their payment completes. Every state change
is fanned out to connected staff and customer sessions through the
notification hub.
"""

import structlog
from protean.domain import Domain

canteen = Domain(name="canteen")

logger = structlog.get_logger(__name__)
