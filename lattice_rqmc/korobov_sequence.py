"""
Korobov Lattice Sequence
========================

An infinite sequence of points whose first b^k points form, for every k,
the Korobov lattice with N = b^k points and multiplier a mod N:

    u_{i,j} = ( ψ_b(i) * b^k * a^j  mod b^k ) / b^k

where ψ_b(i) is the radical inverse of i in base b. Each lattice is embedded
in the next one, so the sequence can be extended without discarding the
points already used.

Coordinate (i, j) is computed from the base-b digit reversal of i:

    1. reversed = digits of i read in reverse order, n = b^(number of digits)
    2. j = 0:  reversed / n                        (= ψ_b(i))
    3. j > 0:  (reversed * (a^j mod n)) mod n / n

All modular arithmetic uses Python integers, which cannot overflow, so the
only rounding is the final division, done once per coordinate.

References
----------
[1] Hickernell, F.J., Hong, H.S., L'Ecuyer, P. and Lemieux, C. (2000).
    Extensible lattice sequences for quasi-Monte Carlo quadrature.
"""

import logging
from typing import Optional

import numpy as np

from .exceptions import InvalidArgumentError
from .pointset import PointSet
from .rank1 import KorobovLattice
from .utils import check_integer, integer_radical_inverse, mod_power, unit_fraction

logger = logging.getLogger(__name__)


def _coordinate_from_reversal(reversed_i: int, n: int, j: int, multiplier: int) -> float:
    if j == 0:
        return unit_fraction(reversed_i, n)
    return unit_fraction((reversed_i * mod_power(multiplier, j, n)) % n, n)


def lattice_sequence_coordinate(i: int, j: int, base: int, multiplier: int) -> float:
    """
    Coordinate j of point i of the Korobov lattice sequence.

    Parameters
    ----------
    i : int
        Point index, i >= 0.
    j : int
        Coordinate index, j >= 0.
    base : int
        Base b >= 2.
    multiplier : int
        Multiplier a >= 1.

    Returns
    -------
    float
        The coordinate, in [0, 1).

    Raises
    ------
    InvalidArgumentError
        If an argument is out of range.

    Examples
    --------
    >>> lattice_sequence_coordinate(5, 0, base=2, multiplier=3)
    0.625
    >>> lattice_sequence_coordinate(5, 1, base=2, multiplier=3)
    0.875
    """
    where = "lattice_sequence_coordinate"
    i = check_integer("point index i", i, 0, where)
    j = check_integer("coordinate index j", j, 0, where)
    base = check_integer("base", base, 2, where)
    multiplier = check_integer("multiplier", multiplier, 1, where)
    if i == 0:
        return 0.0
    reversed_i, n = integer_radical_inverse(base, i)
    return _coordinate_from_reversal(reversed_i, n, j, multiplier)


class KorobovLatticeSequence(PointSet):
    """
    Korobov lattice sequence in base b with multiplier a.

    The sequence has infinitely many points (``num_points`` is None). Its
    dimension is unbounded unless ``dim`` is given.

    Parameters
    ----------
    base : int
        Base b >= 2.
    multiplier : int
        Multiplier a >= 1.
    dim : int, optional
        Dimension cap (default: unbounded).

    Attributes
    ----------
    base : int
        Base b.
    multiplier : int
        Multiplier a.

    Raises
    ------
    InvalidArgumentError
        If base < 2 or multiplier < 1.

    Examples
    --------
    >>> seq = KorobovLatticeSequence(base=2, multiplier=3, dim=3)
    >>> seq.get_point(5)
    array([0.625, 0.875, 0.625])
    >>> seq.points(n=4)
    array([[0.  , 0.  , 0.  ],
           [0.5 , 0.5 , 0.5 ],
           [0.25, 0.75, 0.25],
           [0.75, 0.25, 0.75]])
    """

    def __init__(self, base: int, multiplier: int, dim: Optional[int] = None):
        self.base = check_integer("base", base, 2, "KorobovLatticeSequence")
        self.multiplier = check_integer("multiplier", multiplier, 1, "KorobovLatticeSequence")
        if dim is not None:
            dim = check_integer("dim", dim, 1, "KorobovLatticeSequence")
        super().__init__(dim=dim, num_points=None)

    def _coordinate(self, i: int, j: int) -> float:
        if i == 0:
            return 0.0
        reversed_i, n = integer_radical_inverse(self.base, i)
        return _coordinate_from_reversal(reversed_i, n, j, self.multiplier)

    def get_point(self, i: int, d: Optional[int] = None) -> np.ndarray:
        """
        Return the first d coordinates of point i.

        The digit reversal of i is computed once for all coordinates.
        """
        d = self._resolve_dimension(d, "get_point")
        if d > 0:
            self._check_index(i, d - 1, "get_point")
        else:
            check_integer("point index i", i, 0, "get_point")
        point = np.zeros(d)
        reversed_i, n = integer_radical_inverse(self.base, i)
        for j in range(d):
            x = _coordinate_from_reversal(reversed_i, n, j, self.multiplier) if i else 0.0
            point[j] = self._shifted(x, j)
        return point

    def embedded_lattice(self, k: int, dim: Optional[int] = None) -> KorobovLattice:
        """
        The Korobov lattice formed by the first b^k points.

        Point i of the sequence, i < b^k, is point ψ_b(i) * b^k of the
        returned lattice.

        Parameters
        ----------
        k : int
            Exponent, k >= 0.
        dim : int, optional
            Dimension of the lattice (default: the dimension of the
            sequence, which must then be bounded).
        """
        k = check_integer("k", k, 0, "embedded_lattice")
        if dim is None:
            if self.dim is None:
                raise InvalidArgumentError(
                    "embedded_lattice: dimension is unbounded, pass dim"
                )
            dim = self.dim
        return KorobovLattice(n=self.base ** k, multiplier=self.multiplier, dim=dim)

    def info(self) -> dict:
        info = super().info()
        info.update({"base": self.base, "multiplier": self.multiplier})
        return info

    def __repr__(self) -> str:
        dim = "unbounded" if self.dim is None else self.dim
        return (f"KorobovLatticeSequence(base={self.base}, multiplier={self.multiplier}, "
                f"d={dim})")
