"""Storefront bounded context — Shopping Cart and Checkout orchestration.

Owns the customer's persisted cart, the checkout session state machine that
captures shipping and payment details, and the single-flight submission of a
completed checkout to the order service.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
