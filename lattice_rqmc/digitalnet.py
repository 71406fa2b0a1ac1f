"""
Digital Nets in Base b
======================

A digital net in base b with b^k points in d dimensions is defined by d
generating matrices C_0, ..., C_{d-1}, each with r rows and k columns over
Z_b. For point i with base-b digits a = (a_0, ..., a_{k-1}) (least
significant first), coordinate j has digits

    y = C_j a mod b,      u_{i,j} = sum_{l=0}^{w-1} y_l b^{-l-1}

where w >= r is the number of output digits (y_l = 0 for l >= r).

Randomizations (all provided through :class:`MatrixScrambler`):

    - digital shift: a random digit vector e_j in Z_b^w per coordinate is
      added digit-wise modulo b to every point;
    - left matrix scramble (Matoušek): C_j <- M_j C_j mod b with M_j lower
      triangular, diagonal uniform over {1, ..., b-1}, entries below the
      diagonal uniform over {0, ..., b-1};
    - striped matrix scramble: as the left matrix scramble, except that all
      entries on and below the diagonal of column c of M_j equal a single
      random value in {1, ..., b-1}. In base 2, M_j is always the all-ones
      lower-triangular matrix.

Scrambles always start from the original matrices, so a new scramble
replaces the previous one. A new digital shift replaces the previous shift.
The modulo 1 shift inherited from :class:`PointSet` is kept separately and
composes with both.

References
----------
[1] Matoušek, J. (1998). On the L2-discrepancy for anchored boxes.
[2] Owen, A.B. (2003). Variance with alternative scramblings of digital nets.
"""

import logging
from typing import Optional

import numpy as np

from .exceptions import InvalidArgumentError
from .pointset import EPSILON_HALF, MatrixScrambler, PointSet
from .utils import BELOW_ONE, check_integer, int_to_digits, unit_fraction

logger = logging.getLogger(__name__)


class DigitalNet(PointSet, MatrixScrambler):
    """
    Digital net in base b defined by its generating matrices.

    Points are enumerated in the standard order (no Gray code).

    Parameters
    ----------
    base : int
        Base b >= 2.
    generating_matrices : array_like
        Integer array of shape (d, r, k); entry [j, l, c] is row l, column c
        of C_j. Entries must lie in {0, ..., b-1}.
    out_digits : int, optional
        Number of output digits w >= r (default: r).

    Attributes
    ----------
    base : int
        Base b.
    num_rows : int
        Number of rows r of each generating matrix.
    num_cols : int
        Number of columns k; the net has b^k points.
    out_digits : int
        Number of output digits w.
    generating_matrices : np.ndarray
        Current (possibly scrambled) generating matrices, shape (d, r, k).

    Examples
    --------
    >>> net = DigitalNet.van_der_corput(base=2, num_cols=3)
    >>> net.points()[:, 0]
    array([0.   , 0.5  , 0.25 , 0.75 , 0.125, 0.625, 0.375, 0.875])
    """

    def __init__(self, base: int, generating_matrices, out_digits: Optional[int] = None):
        self.base = check_integer("base", base, 2, "DigitalNet")
        matrices = np.asarray(generating_matrices)
        if matrices.dtype.kind not in "iu":
            raise InvalidArgumentError(
                f"DigitalNet: generating matrix entries must be integers, "
                f"got dtype {matrices.dtype}"
            )
        matrices = matrices.astype(np.int64)
        if matrices.ndim != 3 or 0 in matrices.shape:
            raise InvalidArgumentError(
                f"DigitalNet: generating matrices must have shape (d, r, k) with "
                f"positive sizes, got {matrices.shape}"
            )
        if np.any(matrices < 0) or np.any(matrices >= self.base):
            raise InvalidArgumentError(
                f"DigitalNet: generating matrix entries must lie in "
                f"{{0, ..., {self.base - 1}}}"
            )
        dim, self.num_rows, self.num_cols = matrices.shape
        if out_digits is None:
            out_digits = self.num_rows
        self.out_digits = check_integer("out_digits", out_digits, self.num_rows, "DigitalNet")

        super().__init__(dim=dim, num_points=self.base ** self.num_cols)
        self._original_matrices = matrices
        self._original_matrices.setflags(write=False)
        self.generating_matrices = matrices.copy()
        self._digital_shift = None
        self._scrambled = False

    @classmethod
    def van_der_corput(cls, base: int, num_cols: int, dim: int = 1) -> "DigitalNet":
        """
        Net whose generating matrices are all the k x k identity.

        Every coordinate of point i equals the radical inverse ψ_b(i).

        Parameters
        ----------
        base : int
            Base b.
        num_cols : int
            k; the net has b^k points.
        dim : int, optional
            Dimension (default: 1).
        """
        num_cols = check_integer("num_cols", num_cols, 1, "DigitalNet.van_der_corput")
        dim = check_integer("dim", dim, 1, "DigitalNet.van_der_corput")
        identity = np.eye(num_cols, dtype=np.int64)
        return cls(base, np.tile(identity, (dim, 1, 1)))

    def _output_digits(self, i: int, j: int) -> np.ndarray:
        index_digits = int_to_digits(i, self.base, self.num_cols)
        y = np.zeros(self.out_digits, dtype=np.int64)
        y[:self.num_rows] = self.generating_matrices[j] @ index_digits
        if self._digital_shift is not None:
            y += self._digital_shift[j]
        return y % self.base

    def _coordinate(self, i: int, j: int) -> float:
        numerator = 0
        for digit in self._output_digits(i, j):
            numerator = numerator * self.base + int(digit)
        x = unit_fraction(numerator, self.base ** self.out_digits)
        if self._digital_shift is not None:
            x = min(x + EPSILON_HALF, BELOW_ONE)
        return x

    def add_random_digital_shift(
        self,
        source: np.random.Generator,
        d1: int = 0,
        d2: Optional[int] = None,
    ) -> None:
        """
        Draw a random digital shift for coordinates d1 to d2 - 1.

        For each coordinate, ``out_digits`` digits are drawn uniformly over
        {0, ..., b-1}; they are added modulo b to the digits of every point.
        Shift rows below d1 are kept, the others are replaced. The digital
        shift is independent of the modulo 1 shift of ``add_random_shift``.

        Raises
        ------
        InvalidArgumentError
            If ``source`` is None or the coordinate range is invalid.
        """
        where = "add_random_digital_shift"
        if source is None:
            raise InvalidArgumentError(f"{where}: a random source is required")
        if d2 is None:
            d2 = self.dim
        d1 = check_integer("d1", d1, 0, where)
        d2 = check_integer("d2", d2, d1, where)
        if d2 > self.dim:
            raise InvalidArgumentError(f"{where}: d2 = {d2} exceeds dimension {self.dim}")

        shift = np.zeros((self.dim, self.out_digits), dtype=np.int64)
        if self._digital_shift is not None:
            shift[:d1] = self._digital_shift[:d1]
        shift[d1:d2] = source.integers(0, self.base, size=(d2 - d1, self.out_digits))
        self._digital_shift = shift
        logger.debug("Digital shift drawn for coordinates %d..%d of %r", d1, d2 - 1, self)

    def clear_random_digital_shift(self) -> None:
        """Remove the digital shift, if any."""
        self._digital_shift = None

    @property
    def digital_shift(self) -> Optional[np.ndarray]:
        """Copy of the digital shift digits, shape (d, w), None if not shifted."""
        return None if self._digital_shift is None else self._digital_shift.copy()

    @property
    def original_matrices(self) -> np.ndarray:
        """The generating matrices before any scramble (read-only)."""
        return self._original_matrices

    @property
    def is_scrambled(self) -> bool:
        """True after a matrix scramble, until :meth:`unrandomize`."""
        return self._scrambled

    def _left_multiply(self, scramble: np.ndarray) -> None:
        # M_j (r x r) times original C_j (r x k), for every j.
        self.generating_matrices = np.matmul(scramble, self._original_matrices) % self.base
        self._scrambled = True

    def left_matrix_scramble(self, source: np.random.Generator) -> None:
        """
        Apply a Matoušek left matrix scramble.

        Each C_j is replaced by M_j C_j mod b, computed from the original
        matrix, where M_j is an r x r nonsingular lower-triangular matrix
        with diagonal entries uniform over {1, ..., b-1} and entries below
        the diagonal uniform over {0, ..., b-1}.
        """
        if source is None:
            raise InvalidArgumentError("left_matrix_scramble: a random source is required")
        r = self.num_rows
        diagonal = source.integers(1, self.base, size=(self.dim, r))
        lower = source.integers(0, self.base, size=(self.dim, r, r))
        scramble = np.tril(lower, k=-1)
        rows = np.arange(r)
        scramble[:, rows, rows] = diagonal
        self._left_multiply(scramble)
        logger.debug("Left matrix scramble applied to %r", self)

    def striped_matrix_scramble(self, source: np.random.Generator) -> None:
        """
        Apply a striped matrix scramble.

        Each C_j is replaced by M_j C_j mod b, computed from the original
        matrix, where M_j is lower triangular and column c of M_j holds a
        single value drawn uniformly over {1, ..., b-1} on and below the
        diagonal.
        """
        if source is None:
            raise InvalidArgumentError("striped_matrix_scramble: a random source is required")
        r = self.num_rows
        stripes = source.integers(1, self.base, size=(self.dim, r))
        # M_j[l, c] = stripes[j, c] for l >= c
        scramble = np.tril(np.ones((r, r), dtype=np.int64)) * stripes[:, np.newaxis, :]
        self._left_multiply(scramble)
        logger.debug("Striped matrix scramble applied to %r", self)

    def unrandomize(self) -> None:
        """Remove both shifts and restore the original matrices."""
        super().unrandomize()
        self.clear_random_digital_shift()
        self.generating_matrices = self._original_matrices.copy()
        self._scrambled = False

    def info(self) -> dict:
        info = super().info()
        info.update({
            "base": self.base,
            "num_rows": self.num_rows,
            "num_cols": self.num_cols,
            "out_digits": self.out_digits,
            "digitally_shifted": self._digital_shift is not None,
            "scrambled": self.is_scrambled,
        })
        return info

    def __repr__(self) -> str:
        return (f"DigitalNet(base={self.base}, d={self.dim}, N={self.num_points}, "
                f"rows={self.num_rows}, cols={self.num_cols}, "
                f"out_digits={self.out_digits})")
