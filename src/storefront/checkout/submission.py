"""OrderSubmitter — single-flight submission of a reviewed checkout.

Flow:
    1. Reject outright if the session's submission lock is held
    2. Do nothing if the review guard fails (wrong step, empty cart, stale form)
    3. Take the lock, move to SUBMITTING, await the order service
    4a. Placed → clear the cart, SUCCEEDED, signal navigation, return order id
    4b. Rejected or faulted → keep the cart, FAILED, raise SubmissionError
    5. Release the lock on every exit path

The lock is checked and taken without an intervening ``await``, so two
submissions started back to back on one event loop reach the order service
exactly once.
"""

import structlog

from storefront.cart.store import CartStore
from storefront.checkout.controller import CheckoutController
from storefront.checkout.exceptions import ConcurrentSubmissionError, SubmissionCancelled, SubmissionError
from storefront.navigation.port import NavigationSignal
from storefront.orders.port import OrderResult, OrderService

logger = structlog.get_logger(__name__)


class OrderSubmitter:
    def __init__(
        self,
        cart_store: CartStore,
        order_service: OrderService,
        navigation: NavigationSignal,
    ) -> None:
        self._cart_store = cart_store
        self._order_service = order_service
        self._navigation = navigation

    async def submit(self, controller: CheckoutController) -> str | None:
        """Place the order for the controller's session.

        Returns:
            The order identifier, or None when the review guard did not hold
            and nothing was submitted.

        Raises:
            ConcurrentSubmissionError: a submission is already in flight.
            SubmissionError: the order service rejected the order or failed.
            SubmissionCancelled: the session was abandoned before the order
                service answered; the answer was discarded.
        """
        session = controller.session
        if session.submission_lock:
            logger.warning("Rejected concurrent order submission", session_id=str(session.id))
            raise ConcurrentSubmissionError("An order submission is already in progress")

        if not controller.can_submit():
            logger.debug("Order submission guard failed", session_id=str(session.id), step=session.step)
            return None

        cart = self._cart_store.snapshot()
        shipping_info = session.shipping_info
        token = controller.open_submission()
        logger.info(
            "Submitting order",
            session_id=str(session.id),
            item_count=cart.totals.total_items,
            total_price=cart.totals.total_price,
        )

        try:
            try:
                result = await self._order_service.place_order(cart, shipping_info)
            except Exception as exc:
                logger.exception("Order service failed", session_id=str(session.id))
                result = OrderResult.rejected("service_fault", str(exc) or type(exc).__name__)

            if token.cancelled:
                logger.warning(
                    "Discarding order outcome for abandoned checkout",
                    session_id=str(session.id),
                    order_id=result.order_id,
                    success=result.success,
                )
                raise SubmissionCancelled("Checkout was abandoned while the order was being placed")

            if result.success:
                self._cart_store.clear()
                controller.complete_submission(token, result.order_id)
                logger.info("Order placed", session_id=str(session.id), order_id=result.order_id)
                self._navigation.order_placed(result.order_id)
                return result.order_id

            controller.fail_submission(token, result.error.message)
            logger.warning(
                "Order submission failed",
                session_id=str(session.id),
                code=result.error.code,
                reason=result.error.message,
            )
            raise SubmissionError(result.error)
        finally:
            controller.release_submission(token)
