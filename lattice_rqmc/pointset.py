"""
Point Set Base Class and Capabilities
=====================================

A point set is an ordered collection of points in [0, 1)^d. Point i,
coordinate j is read with ``get_coordinate(i, j)``. Sequences have an
infinite number of points (``num_points is None``) and may have an unbounded
dimension (``dim is None``); their points are computed on demand.

The only mutations a point set accepts are randomizations:

    - ``add_random_shift(source)``: a shift vector U drawn from ``source``
      is added modulo 1 to every point. Calling it again draws a new vector
      that replaces the previous one (shifts never accumulate).
    - capability-specific operations, e.g. the matrix scrambles and the
      digital shift of :class:`MatrixScrambler`.

Randomizations are applied through ``randomize(rand)``, which hands the point
set to a :class:`~lattice_rqmc.randomization.PointSetRandomization`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Type, TypeVar

import numpy as np

from .exceptions import InvalidArgumentError, UnimplementedError
from .utils import check_integer

logger = logging.getLogger(__name__)

# Shifted coordinates equal to 0 are replaced by this value.
EPSILON_HALF = 2.0 ** -55

T = TypeVar("T")


class MatrixScrambler(ABC):
    """
    Capability of point sets defined by generating matrices over Z_b.

    Each operation draws its randomness from ``source`` and replaces the
    effect of any earlier call of the same operation: scrambles are always
    rebuilt from the original matrices and a new digital shift overwrites
    the previous one. A scramble and a digital shift compose, and both
    compose with the modulo 1 shift of :meth:`PointSet.add_random_shift`.
    """

    @abstractmethod
    def striped_matrix_scramble(self, source: np.random.Generator) -> None:
        """Left-multiply each generating matrix by a random striped matrix."""

    @abstractmethod
    def left_matrix_scramble(self, source: np.random.Generator) -> None:
        """Left-multiply each generating matrix by a random lower-triangular matrix."""

    @abstractmethod
    def add_random_digital_shift(
        self,
        source: np.random.Generator,
        d1: int = 0,
        d2: Optional[int] = None,
    ) -> None:
        """Draw a random digital shift for coordinates d1 to d2 - 1."""


class PointSet(ABC):
    """
    Base class of all point sets.

    Parameters
    ----------
    dim : int or None
        Dimension of the points, None if unbounded.
    num_points : int or None
        Number of points, None for an infinite sequence.

    Attributes
    ----------
    dim : int or None
        Dimension.
    num_points : int or None
        Number of points.

    Notes
    -----
    No internal locking is done. ``randomize`` and the shift operations
    mutate the point set and must not run concurrently with any other call
    on the same instance.
    """

    def __init__(self, dim: Optional[int], num_points: Optional[int]):
        self.dim = dim
        self.num_points = num_points
        self._shift = None
        self._shift_source = None

    @abstractmethod
    def _coordinate(self, i: int, j: int) -> float:
        """Unshifted coordinate j of point i. Indices are already validated."""

    def _check_index(self, i, j, where: str) -> None:
        check_integer("point index i", i, 0, where)
        check_integer("coordinate index j", j, 0, where)
        if self.num_points is not None and i >= self.num_points:
            raise InvalidArgumentError(
                f"{where}: point index {i} out of range, "
                f"the point set has {self.num_points} points"
            )
        if self.dim is not None and j >= self.dim:
            raise InvalidArgumentError(
                f"{where}: coordinate index {j} out of range, "
                f"the point set has dimension {self.dim}"
            )

    def _shifted(self, x: float, j: int) -> float:
        if self._shift is None:
            return x
        if j >= len(self._shift):
            # Unbounded dimension: extend the shift with the same source.
            self.add_random_shift(self._shift_source, len(self._shift), j + 1)
        x += float(self._shift[j])
        if x >= 1.0:
            x -= 1.0
        if x <= 0.0:
            x = EPSILON_HALF
        return x

    def get_coordinate(self, i: int, j: int) -> float:
        """
        Return coordinate j of point i, including any random shift.

        Raises
        ------
        InvalidArgumentError
            If an index is negative or out of range.
        """
        self._check_index(i, j, "get_coordinate")
        return self._shifted(self._coordinate(i, j), j)

    def _resolve_dimension(self, d: Optional[int], where: str) -> int:
        if d is None:
            if self.dim is None:
                raise UnimplementedError(
                    f"{where}: dimension is unbounded, pass the number of coordinates"
                )
            return self.dim
        d = check_integer("d", d, 0, where)
        if self.dim is not None and d > self.dim:
            raise InvalidArgumentError(
                f"{where}: requested {d} coordinates, dimension is {self.dim}"
            )
        return d

    def get_point(self, i: int, d: Optional[int] = None) -> np.ndarray:
        """
        Return the first d coordinates of point i.

        Parameters
        ----------
        i : int
            Point index.
        d : int, optional
            Number of coordinates (default: the dimension).

        Returns
        -------
        np.ndarray
            Array of shape (d,).
        """
        d = self._resolve_dimension(d, "get_point")
        point = np.empty(d)
        for j in range(d):
            point[j] = self.get_coordinate(i, j)
        return point

    def points(self, n: Optional[int] = None, d: Optional[int] = None) -> np.ndarray:
        """
        Materialize the first n points, first d coordinates.

        Parameters
        ----------
        n : int, optional
            Number of points (default: all of them).
        d : int, optional
            Number of coordinates (default: the dimension).

        Returns
        -------
        np.ndarray
            Point set of shape (n, d) in [0, 1)^d.

        Raises
        ------
        UnimplementedError
            If ``n`` (or ``d``) is omitted for an infinite sequence
            (or unbounded dimension).
        """
        if n is None:
            if self.num_points is None:
                raise UnimplementedError(
                    "points: number of points is infinite, pass n"
                )
            n = self.num_points
        n = check_integer("n", n, 0, "points")
        if self.num_points is not None and n > self.num_points:
            raise InvalidArgumentError(
                f"points: requested {n} points, the point set has {self.num_points}"
            )
        d = self._resolve_dimension(d, "points")
        result = np.empty((n, d))
        for i in range(n):
            result[i] = self.get_point(i, d)
        return result

    def add_random_shift(
        self,
        source: np.random.Generator,
        d1: int = 0,
        d2: Optional[int] = None,
    ) -> None:
        """
        Draw a uniform random shift modulo 1 for coordinates d1 to d2 - 1.

        One variate is drawn per coordinate and the same shift vector is
        applied to every point. Shift components below d1 are kept, those
        from d1 on are replaced, so ``add_random_shift(source)`` discards
        the previous shift entirely.

        Parameters
        ----------
        source : np.random.Generator
            Source of the uniforms. Kept to extend the shift on demand when
            the dimension is unbounded.
        d1 : int, optional
            First coordinate to shift (default: 0).
        d2 : int, optional
            One past the last coordinate to shift (default: the dimension,
            or 1 if the dimension is unbounded).

        Raises
        ------
        InvalidArgumentError
            If ``source`` is None or the coordinate range is invalid.
        """
        if source is None:
            raise InvalidArgumentError("add_random_shift: a random source is required")
        if d2 is None:
            d2 = self.dim if self.dim is not None else 1
        d1 = check_integer("d1", d1, 0, "add_random_shift")
        d2 = check_integer("d2", d2, d1, "add_random_shift")
        if self.dim is not None and d2 > self.dim:
            raise InvalidArgumentError(
                f"add_random_shift: d2 = {d2} exceeds dimension {self.dim}"
            )

        shift = np.zeros(d2)
        if self._shift is not None:
            keep = min(d1, len(self._shift))
            shift[:keep] = self._shift[:keep]
        shift[d1:d2] = source.random(d2 - d1)
        self._shift = shift
        self._shift_source = source
        logger.debug("Random shift drawn for coordinates %d..%d of %r", d1, d2 - 1, self)

    def clear_random_shift(self) -> None:
        """Remove the random shift, if any."""
        self._shift = None
        self._shift_source = None

    @property
    def random_shift(self) -> Optional[np.ndarray]:
        """Copy of the current shift vector, None if not shifted."""
        return None if self._shift is None else self._shift.copy()

    def get_shift_source(self) -> Optional[np.random.Generator]:
        """Source used by the last random shift."""
        return self._shift_source

    def randomize(self, rand) -> None:
        """Apply the randomization ``rand`` to this point set."""
        rand.randomize(self)

    def unrandomize(self) -> None:
        """Undo all randomizations."""
        self.clear_random_shift()

    def capability(self, kind: Type[T]) -> Optional[T]:
        """
        Query an optional capability.

        Parameters
        ----------
        kind : type
            Capability interface, e.g. :class:`MatrixScrambler`.

        Returns
        -------
        object or None
            The object providing ``kind``, None if unsupported.
        """
        return self if isinstance(self, kind) else None

    def info(self) -> dict:
        """Return a dictionary with point set information."""
        return {
            "type": type(self).__name__,
            "dimension": self.dim,
            "num_points": self.num_points,
            "randomized": self._shift is not None,
        }
