"""CheckoutSession aggregate — one checkout attempt from shipping to order.

State Machine (6 states):
    SHIPPING → PAYMENT → REVIEW → SUBMITTING → SUCCEEDED
    PAYMENT → SHIPPING, REVIEW → PAYMENT       (step back)
    REVIEW → SHIPPING | PAYMENT                (edit jumps)
    SUBMITTING → FAILED → REVIEW               (retry)

The aggregate only enforces which transitions exist. Whether a forward step
is *allowed* (the step guards) is decided by the CheckoutController, which
leaves the step unchanged when a guard fails.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text, ValueObject

from storefront.domain import storefront


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class CheckoutStep(Enum):
    SHIPPING = "Shipping"
    PAYMENT = "Payment"
    REVIEW = "Review"
    SUBMITTING = "Submitting"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class Country(Enum):
    US = "US"
    CA = "CA"
    UK = "UK"
    AU = "AU"


# State machine transition map
_VALID_TRANSITIONS = {
    CheckoutStep.SHIPPING: {CheckoutStep.PAYMENT},
    CheckoutStep.PAYMENT: {CheckoutStep.SHIPPING, CheckoutStep.REVIEW},
    CheckoutStep.REVIEW: {
        CheckoutStep.SHIPPING,  # Edit jump
        CheckoutStep.PAYMENT,
        CheckoutStep.SUBMITTING,
    },
    CheckoutStep.SUBMITTING: {CheckoutStep.SUCCEEDED, CheckoutStep.FAILED},
    CheckoutStep.FAILED: {CheckoutStep.REVIEW},
    CheckoutStep.SUCCEEDED: set(),  # Terminal
}

# Steps during which form data may be edited
EDITABLE_STEPS = {
    CheckoutStep.SHIPPING,
    CheckoutStep.PAYMENT,
    CheckoutStep.REVIEW,
    CheckoutStep.FAILED,
}

SHIPPING_FIELDS = (
    "first_name",
    "last_name",
    "address",
    "city",
    "state",
    "zip_code",
    "country",
    "email",
    "phone",
)

PAYMENT_FIELDS = ("card_name", "card_number", "expiry_date", "cvv")


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object
class ShippingInfo:
    """Where and to whom the order ships, as typed into the shipping step.

    Fields may be blank while the customer is still filling in the form;
    completeness is checked by the shipping guard, not here.
    """

    first_name = Text()
    last_name = Text()
    address = Text()
    city = Text()
    state = Text()
    zip_code = Text()
    country = String(max_length=2, choices=Country, default=Country.US.value)
    email = Text()
    phone = Text()


@storefront.value_object
class PaymentInfo:
    """Card details in their canonical display form."""

    card_name = Text()
    card_number = String(max_length=19)
    expiry_date = String(max_length=5)
    cvv = Text()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class CheckoutSession:
    customer_id = Identifier()
    step = String(choices=CheckoutStep, default=CheckoutStep.SHIPPING.value)
    shipping_info = ValueObject(ShippingInfo)
    payment_info = ValueObject(PaymentInfo)
    submission_lock = Boolean(default=False)
    order_id = String(max_length=255)
    failure_reason = Text()
    started_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def start(cls, customer_id=None, email=None, country=Country.US.value):
        """Open a session at the shipping step, pre-filling what is already known."""
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            step=CheckoutStep.SHIPPING.value,
            shipping_info=ShippingInfo(email=email, country=country),
            payment_info=PaymentInfo(),
            submission_lock=False,
            started_at=now,
            updated_at=now,
        )

    @property
    def current_step(self) -> CheckoutStep:
        return CheckoutStep(self.step)

    @property
    def is_editable(self) -> bool:
        return self.current_step in EDITABLE_STEPS

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_step):
        current = self.current_step
        if target_step not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"step": [f"Cannot transition from {current.value} to {target_step.value}"]})

    def move_to(self, target_step: CheckoutStep) -> None:
        self._assert_can_transition(target_step)
        self.step = target_step.value
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Form data
    # -------------------------------------------------------------------
    def revise_shipping_info(self, default_country=Country.US.value, **changes) -> None:
        """Replace the named shipping fields, keeping every other field as entered.

        A blank ``country`` falls back to ``default_country``.
        """
        unknown = sorted(set(changes) - set(SHIPPING_FIELDS))
        if unknown:
            raise ValidationError({name: ["Unknown shipping field"] for name in unknown})

        if "country" in changes and not changes["country"]:
            changes["country"] = default_country

        self.shipping_info = ShippingInfo(**{**self.shipping_info.to_dict(), **changes})
        self.updated_at = datetime.now(UTC)

    def revise_payment_info(self, **changes) -> None:
        """Replace the named payment fields, keeping every other field as entered."""
        unknown = sorted(set(changes) - set(PAYMENT_FIELDS))
        if unknown:
            raise ValidationError({name: ["Unknown payment field"] for name in unknown})

        self.payment_info = PaymentInfo(**{**self.payment_info.to_dict(), **changes})
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def lock_for_submission(self) -> None:
        if self.submission_lock:
            raise ValidationError({"submission_lock": ["A submission is already in progress"]})

        self.move_to(CheckoutStep.SUBMITTING)
        self.submission_lock = True
        self.order_id = None
        self.failure_reason = None

    def record_success(self, order_id: str) -> None:
        self.move_to(CheckoutStep.SUCCEEDED)
        self.order_id = order_id
        self.submission_lock = False

    def record_failure(self, reason: str) -> None:
        self.move_to(CheckoutStep.FAILED)
        self.failure_reason = reason
        self.submission_lock = False

    def release_submission_lock(self) -> None:
        """Release the lock on any exit path; an unresolved submission counts as failed."""
        if self.current_step == CheckoutStep.SUBMITTING:
            self.record_failure("Submission interrupted")
        self.submission_lock = False
