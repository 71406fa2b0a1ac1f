"""
Rank-1 and Korobov Lattice Point Sets
=====================================

A rank-1 lattice with N points and generating vector z = (z_1, ..., z_d) is

    P_N = { ({k z_1 / N}, ..., {k z_d / N}) : k = 0, 1, ..., N-1 }

where {x} denotes the fractional part. A Korobov lattice is the rank-1
lattice whose generating vector is z = (1, a, a^2, ..., a^{d-1}) mod N for
a single multiplier a.

Coordinates are computed with exact integer arithmetic, ``(k * z_j mod N)``,
and converted to float by a single division.

References
----------
[1] Korobov, N.M. (1959). The approximate computation of multiple integrals.
[2] Sloan, I.H. and Joe, S. (1994). Lattice Methods for Multiple Integration.
"""

from typing import Sequence

import numpy as np

from .exceptions import InvalidArgumentError
from .pointset import PointSet
from .utils import check_integer, unit_fraction


class Rank1Lattice(PointSet):
    """
    Rank-1 lattice point set.

    Parameters
    ----------
    n : int
        Number of points N.
    generating_vector : sequence of int
        Non-negative generating vector (z_1, ..., z_d). Entries are reduced
        modulo N.

    Attributes
    ----------
    generating_vector : np.ndarray
        The generating vector reduced modulo N.

    Examples
    --------
    >>> lattice = Rank1Lattice(8, [1, 3])
    >>> lattice.get_point(3)
    array([0.375, 0.125])
    """

    def __init__(self, n: int, generating_vector: Sequence[int]):
        n = check_integer("n", n, 1, type(self).__name__)
        z = [
            check_integer("generating vector entry", a, 0, type(self).__name__) % n
            for a in generating_vector
        ]
        if not z:
            raise InvalidArgumentError(
                f"{type(self).__name__}: generating vector must not be empty"
            )
        super().__init__(dim=len(z), num_points=n)
        self._z = z

    @property
    def generating_vector(self) -> np.ndarray:
        return np.asarray(self._z)

    def _coordinate(self, i: int, j: int) -> float:
        return unit_fraction((i * self._z[j]) % self.num_points, self.num_points)

    def info(self) -> dict:
        info = super().info()
        info["generating_vector"] = list(self._z)
        return info

    def __repr__(self) -> str:
        return f"Rank1Lattice(N={self.num_points}, z={self._z})"


class KorobovLattice(Rank1Lattice):
    """
    Korobov lattice with N points and multiplier a.

    Parameters
    ----------
    n : int
        Number of points N.
    multiplier : int
        The multiplier a >= 1.
    dim : int
        Dimension d.

    Attributes
    ----------
    multiplier : int
        The multiplier a.

    Examples
    --------
    >>> lattice = KorobovLattice(n=101, multiplier=12, dim=3)
    >>> lattice.generating_vector
    array([ 1, 12, 43])
    """

    def __init__(self, n: int, multiplier: int, dim: int):
        n = check_integer("n", n, 1, "KorobovLattice")
        self.multiplier = check_integer("multiplier", multiplier, 1, "KorobovLattice")
        dim = check_integer("dim", dim, 1, "KorobovLattice")
        super().__init__(n, self._compute_generating_vector(n, self.multiplier, dim))

    @staticmethod
    def _compute_generating_vector(n: int, a: int, d: int) -> list:
        """
        Compute the generating vector (1, a, a^2, ..., a^{d-1}) mod N.

        Powers are reduced modulo N at each step.
        """
        z = []
        power = 1 % n
        for _ in range(d):
            z.append(power)
            power = (power * a) % n
        return z

    def info(self) -> dict:
        info = super().info()
        info["multiplier"] = self.multiplier
        return info

    def __repr__(self) -> str:
        return (f"KorobovLattice(N={self.num_points}, multiplier={self.multiplier}, "
                f"d={self.dim})")
