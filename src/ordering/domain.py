"""Ordering bounded context: menu, carts, checkout and the live order board.

Handles cart assembly and pricing, the checkout that turns a cart into a
pending order, the order lifecycle driven by staff, and the invalidation
signals that keep every open dashboard in step with stored orders.
"""

import structlog
from protean.domain import Domain

from ordering.utils.logging import configure_logging

configure_logging(log_dir="logs", log_file_prefix="orderboard")

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
