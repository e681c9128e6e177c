"""Fixed-point helpers for the 18-decimal canonical domain.

Every reading exchanged between proxies is an integer scaled by ``10**18``.
Division truncates toward zero, matching Solidity signed integer division,
which is not what Python's ``//`` does for negative operands.

.. code-block:: python

    >>> to_canonical(25_000_000, 8)
    250000000000000000
    >>> from_canonical(1_000_100_000_000_000_000, 8)
    100010000
    >>> div_trunc(-7, 2)
    -3
"""

CANONICAL_DECIMALS = 18

# 1.0 in the canonical domain.
SCALE = 10**CANONICAL_DECIMALS

MIN_DECIMALS = 1
MAX_DECIMALS = 36


def div_trunc(numerator: int, denominator: int) -> int:
    """Divide two integers, truncating the quotient toward zero.

    :param numerator: Dividend.
    :param denominator: Divisor, must not be zero.
    :returns: The truncated quotient.
    :raises ZeroDivisionError: If denominator is zero.
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def scaling_factor(decimals: int) -> int:
    """Return the power of ten between ``decimals`` and the canonical domain.

    :param decimals: Decimal count of the non-canonical representation.
    :returns: ``10 ** abs(decimals - 18)``.
    """
    return 10 ** abs(decimals - CANONICAL_DECIMALS)


def to_canonical(value: int, decimals: int) -> int:
    """Rescale a value with ``decimals`` decimals into the canonical domain.

    :param value: Fixed-point integer with ``decimals`` decimals.
    :param decimals: Decimal count of ``value``.
    :returns: The value with 18 decimals.
    """
    if decimals < CANONICAL_DECIMALS:
        return value * scaling_factor(decimals)
    if decimals > CANONICAL_DECIMALS:
        return div_trunc(value, scaling_factor(decimals))
    return value


def from_canonical(value: int, decimals: int) -> int:
    """Rescale a canonical value into a representation with ``decimals`` decimals.

    :param value: Fixed-point integer with 18 decimals.
    :param decimals: Target decimal count.
    :returns: The value with ``decimals`` decimals.
    """
    if decimals > CANONICAL_DECIMALS:
        return value * scaling_factor(decimals)
    if decimals < CANONICAL_DECIMALS:
        return div_trunc(value, scaling_factor(decimals))
    return value
