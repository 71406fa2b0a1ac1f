"""
Integer arithmetic helpers for lattice sequences and digital nets.
"""

import numbers
from typing import Tuple

import numpy as np

from .exceptions import InvalidArgumentError

# Largest double below 1.
BELOW_ONE = 1.0 - 2.0 ** -53


def check_integer(name: str, value, minimum: int, where: str) -> int:
    """
    Validate that ``value`` is an integer not smaller than ``minimum``.

    Parameters
    ----------
    name : str
        Name of the argument, used in the error message.
    value : int
        Value to check. numpy integers are accepted and converted.
    minimum : int
        Smallest accepted value.
    where : str
        Name of the calling operation, used in the error message.

    Returns
    -------
    int
        ``value`` as a Python int.

    Raises
    ------
    InvalidArgumentError
        If ``value`` is not an integer or is smaller than ``minimum``.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(
            f"{where}: {name} must be an integer, got {value!r}"
        )
    if value < minimum:
        raise InvalidArgumentError(
            f"{where}: {name} must be >= {minimum}, got {value}"
        )
    return int(value)


def integer_radical_inverse(base: int, i: int) -> Tuple[int, int]:
    """
    Reverse the base-b digits of ``i``.

    The digits of ``i`` are consumed from the least significant one, so that
    ``reversed / n`` is the radical inverse ψ_b(i).

    Parameters
    ----------
    base : int
        Base b >= 2.
    i : int
        Non-negative integer.

    Returns
    -------
    reversed : int
        Integer whose base-b digits are those of ``i`` in reverse order.
    n : int
        b raised to the number of base-b digits of ``i`` (1 when i = 0).

    Examples
    --------
    >>> integer_radical_inverse(2, 6)   # 110 -> 011
    (3, 8)
    >>> integer_radical_inverse(10, 123)
    (321, 1000)
    """
    reversed_i = 0
    n = 1
    while i > 0:
        i, digit = divmod(i, base)
        reversed_i = reversed_i * base + digit
        n *= base
    return reversed_i, n


def radical_inverse(base: int, i: int) -> float:
    """
    Compute the radical inverse ψ_b(i).

    The value is the exact rational ``reversed / n`` rounded once to the
    nearest float.

    Examples
    --------
    >>> radical_inverse(2, 1)
    0.5
    >>> radical_inverse(3, 5)   # 12 in base 3 -> 0.21
    0.7777777777777778
    """
    reversed_i, n = integer_radical_inverse(base, i)
    return unit_fraction(reversed_i, n)


def mod_power(a: int, e: int, m: int) -> int:
    """
    Compute a^e mod m by repeated squaring.

    Every product is reduced modulo ``m``, so intermediate values stay below
    m^2. ``a`` may be larger than ``m``.

    Parameters
    ----------
    a : int
        Base of the power, a >= 0.
    e : int
        Exponent, e >= 0.
    m : int
        Modulus, m >= 1.

    Returns
    -------
    int
        a^e mod m, in [0, m).
    """
    result = 1 % m
    a %= m
    while e > 0:
        if e & 1:
            result = (result * a) % m
        a = (a * a) % m
        e >>= 1
    return result


def int_to_digits(i: int, base: int, num_digits: int) -> np.ndarray:
    """
    Base-b digits of ``i``, least significant first.

    Parameters
    ----------
    i : int
        Non-negative integer with at most ``num_digits`` base-b digits.
    base : int
        Base b >= 2.
    num_digits : int
        Length of the returned array.

    Returns
    -------
    np.ndarray
        Integer array of shape (num_digits,).
    """
    digits = np.zeros(num_digits, dtype=np.int64)
    for c in range(num_digits):
        if i == 0:
            break
        i, digits[c] = divmod(i, base)
    return digits


def unit_fraction(numerator: int, denominator: int) -> float:
    """
    Round ``numerator / denominator`` in [0, 1) to a float in [0, 1).

    The quotient is rounded once to the nearest float. When the denominator
    exceeds 2^53 the nearest float can be 1.0; it is replaced by
    :data:`BELOW_ONE`, one ulp away.

    Examples
    --------
    >>> unit_fraction(3, 8)
    0.375
    >>> unit_fraction(2 ** 60 - 1, 2 ** 60) == BELOW_ONE
    True
    """
    return min(numerator / denominator, BELOW_ONE)
