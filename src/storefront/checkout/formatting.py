"""Input formatters for payment fields, applied on every raw edit."""

import re

_NON_DIGITS = re.compile(r"\D")

CARD_NUMBER_DIGITS = 16
CARD_GROUP_SIZE = 4


def format_card_number(value: str) -> str:
    """Strip non-digits, keep at most 16, and group them in blocks of four.

    >>> format_card_number("4242-4242 4242x4242")
    '4242 4242 4242 4242'
    """
    digits = _NON_DIGITS.sub("", value or "")[:CARD_NUMBER_DIGITS]
    groups = [digits[i : i + CARD_GROUP_SIZE] for i in range(0, len(digits), CARD_GROUP_SIZE)]
    return " ".join(groups)


def format_expiry_date(value: str) -> str:
    """Format raw expiry input as ``MM/YY``.

    Up to two digits are returned as typed; beyond four digits the rest is dropped.

    >>> format_expiry_date("122599")
    '12/25'
    """
    digits = _NON_DIGITS.sub("", value or "")
    if len(digits) <= 2:
        return digits
    return f"{digits[:2]}/{digits[2:4]}"
