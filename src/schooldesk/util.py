"""General utility functions."""

from __future__ import annotations

import re

from .constants import IDENTIFIER_LENGTH

_NON_DIGIT_REGEX = re.compile(r"[^0-9]")

__all__ = [
    "format_identifier",
    "normalize_identifier",
]


def format_identifier(value: str) -> str:
    """Format an identifier for display with the ``999.999.999-99`` mask.

    Parameters
    ----------
    value
        Identifier, with or without formatting.

    Returns
    -------
    str
        Masked identifier. Values that do not contain exactly the number of
        digits of a canonical identifier are returned normalized but
        unmasked.
    """
    digits = normalize_identifier(value)
    if len(digits) != IDENTIFIER_LENGTH:
        return digits
    return f"{digits[0:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def normalize_identifier(raw: str) -> str:
    """Convert user input into a canonical identifier.

    The identifier field may keep its display mask, so this must be applied
    before any directory lookup.

    Parameters
    ----------
    raw
        Identifier as typed by the user.

    Returns
    -------
    str
        Only the digits of the input, in their original order.
    """
    return _NON_DIGIT_REGEX.sub("", raw)
