"""
Randomization Strategies for Point Sets
=======================================

A randomization turns a deterministic point set into a randomized one so
that averages over its points are unbiased estimators. Every strategy
implements the same contract:

    - ``randomize(point_set)``: randomize ``point_set`` in place,
    - ``set_source(source)`` / ``get_source()``: replace or read the random
      source, a ``numpy.random.Generator``.

The source is not owned by the strategy: several strategies may share one
generator, in which case the caller serializes their use.

Composition: strategies of different types compose, their effects
accumulate. Re-applying a strategy of the same type replaces the effect of
the previous application of that type, because the underlying point-set
operations (random shift, digital shift, matrix scrambles) each replace
their previous result instead of adding to it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .exceptions import InvalidArgumentError
from .pointset import MatrixScrambler

logger = logging.getLogger(__name__)


class PointSetRandomization(ABC):
    """
    Base class of randomization strategies.

    Parameters
    ----------
    source : np.random.Generator, optional
        Random source used by ``randomize``.
    """

    label = "randomization"

    def __init__(self, source: Optional[np.random.Generator] = None):
        self._source = source

    @abstractmethod
    def randomize(self, point_set) -> None:
        """Randomize ``point_set`` in place."""

    def set_source(self, source: Optional[np.random.Generator]) -> None:
        self._source = source

    def get_source(self) -> Optional[np.random.Generator]:
        return self._source

    def _require_source(self, where: str) -> np.random.Generator:
        if self._source is None:
            raise InvalidArgumentError(f"{where}: no random source set")
        return self._source

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self._source!r})"


class IdentityRandomization(PointSetRandomization):
    """
    Randomization that does nothing.

    Useful where a strategy is required but the point set must stay
    deterministic. ``randomize`` never draws from the source.
    """

    label = "no randomization"

    def randomize(self, point_set) -> None:
        pass


class UniformShift(PointSetRandomization):
    """
    Uniform random shift modulo 1.

    ``randomize(p)`` calls ``p.add_random_shift(source)``: the point set
    draws one uniform per coordinate and adds this shift vector modulo 1 to
    every point. A second call replaces the first shift.

    Subclasses override ``randomize`` and keep the source accessors.
    """

    label = "random shift"

    def randomize(self, point_set) -> None:
        source = self._require_source(f"{type(self).__name__}.randomize")
        logger.debug("Applying %s to %r", self.label, point_set)
        point_set.add_random_shift(source)


class _ScrambleShift(UniformShift):
    # Scramble the generating matrices, then digitally shift the scrambled net.

    @abstractmethod
    def _scramble(self, scrambler: MatrixScrambler, source: np.random.Generator) -> None:
        """Scramble the generating matrices of ``scrambler``."""

    def randomize(self, point_set) -> None:
        where = f"{type(self).__name__}.randomize"
        query = getattr(point_set, "capability", None)
        scrambler = query(MatrixScrambler) if query is not None else None
        if scrambler is None:
            raise InvalidArgumentError(
                f"{where}: {type(point_set).__name__} does not provide the "
                f"{MatrixScrambler.__name__} capability (a digital net is required)"
            )
        source = self._require_source(where)
        logger.debug("Applying %s to %r", self.label, point_set)
        self._scramble(scrambler, source)
        scrambler.add_random_digital_shift(source)


class StripedScrambleShift(_ScrambleShift):
    """
    Striped matrix scramble followed by a random digital shift.

    The point set must provide the :class:`MatrixScrambler` capability
    (e.g. a :class:`~lattice_rqmc.digitalnet.DigitalNet`); otherwise
    ``randomize`` raises :class:`InvalidArgumentError` without modifying it.
    Both steps draw from the same source, the scramble first.
    """

    label = "striped matrix scramble + random digital shift"

    def _scramble(self, scrambler: MatrixScrambler, source: np.random.Generator) -> None:
        scrambler.striped_matrix_scramble(source)


class LeftMatrixScrambleShift(_ScrambleShift):
    """
    Left matrix scramble followed by a random digital shift.

    Same contract as :class:`StripedScrambleShift`, with the Matoušek left
    matrix scramble.
    """

    label = "left matrix scramble + random digital shift"

    def _scramble(self, scrambler: MatrixScrambler, source: np.random.Generator) -> None:
        scrambler.left_matrix_scramble(source)
