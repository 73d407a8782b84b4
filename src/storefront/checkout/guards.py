"""Step guards — preconditions that must hold before a forward transition.

Card and CVV checks are length-based only. There is no checksum (Luhn) or
expiry-in-the-future check; strengthening them would change which sessions
may advance.
"""

from storefront.checkout.session import PaymentInfo, ShippingInfo

REQUIRED_SHIPPING_FIELDS = (
    "first_name",
    "last_name",
    "address",
    "city",
    "state",
    "zip_code",
    "email",
    "phone",
)

# 16 digits plus the three separating spaces
FORMATTED_CARD_NUMBER_LENGTH = 19
CVV_LENGTH = 3


def missing_shipping_fields(info: ShippingInfo) -> list[str]:
    return [name for name in REQUIRED_SHIPPING_FIELDS if not getattr(info, name)]


def shipping_is_complete(info: ShippingInfo) -> bool:
    return not missing_shipping_fields(info)


def payment_problems(info: PaymentInfo) -> list[str]:
    """Name each payment field that fails its check."""
    problems = []
    if not info.card_name:
        problems.append("card_name")
    if len(info.card_number or "") != FORMATTED_CARD_NUMBER_LENGTH:
        problems.append("card_number")
    if not info.expiry_date:
        problems.append("expiry_date")
    if len(info.cvv or "") != CVV_LENGTH:
        problems.append("cvv")
    return problems


def payment_is_complete(info: PaymentInfo) -> bool:
    return not payment_problems(info)
