"""CheckoutController — drives one checkout session through its steps.

The controller is the only writer of the CheckoutSession. It reads the cart
through CartStore but never mutates it; clearing the cart after a placed
order is the OrderSubmitter's job.

Guard failures are silent: ``next_step()`` simply
leaves the session where it was. Callers that want to say *why* can ask
``missing_shipping_fields()`` or ``payment_problems()``.
"""

import structlog

from storefront.cart.store import CartStore
from storefront.checkout import guards
from storefront.checkout.cancellation import CancellationToken
from storefront.checkout.exceptions import CheckoutAccessDenied, CheckoutNotStarted
from storefront.checkout.formatting import format_card_number, format_expiry_date
from storefront.checkout.pricing import OrderSummary, summarize
from storefront.checkout.session import CheckoutSession, CheckoutStep
from storefront.config import StorefrontSettings
from storefront.identity.port import IdentityProvider

logger = structlog.get_logger(__name__)

# Sequential forward/backward moves; edit jumps and retry are handled separately
_NEXT_STEP = {
    CheckoutStep.SHIPPING: CheckoutStep.PAYMENT,
    CheckoutStep.PAYMENT: CheckoutStep.REVIEW,
}

_PREVIOUS_STEP = {
    CheckoutStep.PAYMENT: CheckoutStep.SHIPPING,
    CheckoutStep.REVIEW: CheckoutStep.PAYMENT,
}


class CheckoutController:
    def __init__(
        self,
        cart_store: CartStore,
        identity: IdentityProvider,
        settings: StorefrontSettings | None = None,
    ) -> None:
        self._cart_store = cart_store
        self._identity = identity
        self._settings = settings or StorefrontSettings()
        self._session: CheckoutSession | None = None
        self._inflight: CancellationToken | None = None

    # -------------------------------------------------------------------
    # Session lifecycle
    # -------------------------------------------------------------------
    @property
    def session(self) -> CheckoutSession:
        if self._session is None:
            raise CheckoutNotStarted("No checkout session is active")
        return self._session

    @property
    def has_session(self) -> bool:
        return self._session is not None

    @property
    def step(self) -> CheckoutStep:
        return self.session.current_step

    def begin(self) -> CheckoutSession:
        """Start checkout for the signed-in user, or resume the open session.

        Raises:
            CheckoutAccessDenied: nobody is signed in.
        """
        user = self._identity.current_user()
        if user is None or not user.id:
            raise CheckoutAccessDenied("Sign in to check out")

        if self._session is not None:
            if str(self._session.customer_id) != str(user.id):
                logger.info(
                    "Discarding checkout of another customer",
                    session_id=str(self._session.id),
                    customer_id=user.id,
                )
                self.abandon()
            elif self._session.current_step != CheckoutStep.SUCCEEDED:
                return self._session

        self._session = CheckoutSession.start(
            customer_id=user.id,
            email=user.email,
            country=self._settings.default_country,
        )
        logger.info("Checkout started", customer_id=user.id, session_id=str(self._session.id))
        return self._session

    def abandon(self) -> None:
        """Tear the session down, cancelling any submission still in flight."""
        if self._session is None:
            return

        if self._inflight is not None:
            self._inflight.cancel()
            self._inflight = None
            logger.warning("Checkout abandoned during submission", session_id=str(self._session.id))

        self._session.release_submission_lock()
        logger.info("Checkout abandoned", session_id=str(self._session.id), step=self._session.step)
        self._session = None

    # -------------------------------------------------------------------
    # Form data
    # -------------------------------------------------------------------
    def update_shipping(self, **changes) -> None:
        session = self.session
        if not session.is_editable:
            logger.debug("Ignoring shipping edit", step=session.step)
            return
        session.revise_shipping_info(default_country=self._settings.default_country, **changes)

    def update_payment(self, **changes) -> None:
        session = self.session
        if not session.is_editable:
            logger.debug("Ignoring payment edit", step=session.step)
            return

        if "card_number" in changes:
            changes["card_number"] = format_card_number(changes["card_number"])
        if "expiry_date" in changes:
            changes["expiry_date"] = format_expiry_date(changes["expiry_date"])
        session.revise_payment_info(**changes)

    def set_card_number(self, raw: str) -> None:
        self.update_payment(card_number=raw)

    def set_expiry_date(self, raw: str) -> None:
        self.update_payment(expiry_date=raw)

    def missing_shipping_fields(self) -> list[str]:
        return guards.missing_shipping_fields(self.session.shipping_info)

    def payment_problems(self) -> list[str]:
        return guards.payment_problems(self.session.payment_info)

    # -------------------------------------------------------------------
    # Navigation between steps
    # -------------------------------------------------------------------
    def _guard_passes(self, step: CheckoutStep) -> bool:
        session = self.session
        if step == CheckoutStep.SHIPPING:
            return guards.shipping_is_complete(session.shipping_info)
        if step == CheckoutStep.PAYMENT:
            return guards.payment_is_complete(session.payment_info)
        return False

    def next_step(self) -> CheckoutStep:
        """Advance one step if the current step's guard holds; otherwise stay put."""
        session = self.session
        current = session.current_step
        target = _NEXT_STEP.get(current)
        if target is not None and self._guard_passes(current):
            session.move_to(target)
        return session.current_step

    def prev_step(self) -> CheckoutStep:
        """Step back without re-checking any guard or touching form data."""
        session = self.session
        target = _PREVIOUS_STEP.get(session.current_step)
        if target is not None:
            session.move_to(target)
        return session.current_step

    def edit_shipping(self) -> CheckoutStep:
        return self._jump_from_review(CheckoutStep.SHIPPING)

    def edit_payment(self) -> CheckoutStep:
        return self._jump_from_review(CheckoutStep.PAYMENT)

    def _jump_from_review(self, target: CheckoutStep) -> CheckoutStep:
        session = self.session
        if session.current_step == CheckoutStep.REVIEW:
            session.move_to(target)
        return session.current_step

    def retry(self) -> CheckoutStep:
        """Return a failed submission to the review step."""
        session = self.session
        if session.current_step == CheckoutStep.FAILED:
            session.move_to(CheckoutStep.REVIEW)
        return session.current_step

    # -------------------------------------------------------------------
    # Review and submission
    # -------------------------------------------------------------------
    def can_submit(self) -> bool:
        """Review guard: a non-empty cart and form data that still passes both guards."""
        session = self.session
        return (
            session.current_step == CheckoutStep.REVIEW
            and not session.submission_lock
            and not self._cart_store.is_empty
            and guards.shipping_is_complete(session.shipping_info)
            and guards.payment_is_complete(session.payment_info)
        )

    def order_summary(self) -> OrderSummary:
        return summarize(
            self._cart_store.totals(),
            tax_rate=self._settings.tax_rate,
            shipping_cost=self._settings.shipping_cost,
            currency=self._settings.currency,
        )

    def open_submission(self) -> CancellationToken:
        """Take the single-flight lock and move to SUBMITTING."""
        self.session.lock_for_submission()
        self._inflight = CancellationToken()
        return self._inflight

    def complete_submission(self, token: CancellationToken, order_id: str) -> bool:
        """Record a placed order. Returns False when the token was cancelled."""
        if token.cancelled:
            return False
        self.session.record_success(order_id)
        self._inflight = None
        return True

    def fail_submission(self, token: CancellationToken, reason: str) -> bool:
        """Record a failed submission. Returns False when the token was cancelled."""
        if token.cancelled:
            return False
        self.session.record_failure(reason)
        self._inflight = None
        return True

    def release_submission(self, token: CancellationToken) -> None:
        """Release the lock on whatever exit path the submission took."""
        if token.cancelled or self._session is None:
            return
        self._session.release_submission_lock()
        if self._inflight is token:
            self._inflight = None
