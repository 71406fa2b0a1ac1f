"""
Randomized Quasi-Monte Carlo with Lattice Sequences
===================================================

This package provides deterministic low-discrepancy point sets and the
randomizations that turn them into randomized quasi-Monte Carlo designs.

Main classes:
- KorobovLatticeSequence: infinite Korobov lattice sequence, embedded lattices of size b^k
- KorobovLattice, Rank1Lattice: classical rank-1 lattice point sets
- DigitalNet: digital net in base b with matrix scrambles and digital shift
- IdentityRandomization, UniformShift, StripedScrambleShift, LeftMatrixScrambleShift:
  randomization strategies

Random sources are numpy.random.Generator instances.

License: MIT
"""

import logging

from .exceptions import InvalidArgumentError, UnimplementedError
from .pointset import EPSILON_HALF, MatrixScrambler, PointSet
from .rank1 import KorobovLattice, Rank1Lattice
from .digitalnet import DigitalNet
from .korobov_sequence import KorobovLatticeSequence, lattice_sequence_coordinate
from .randomization import (
    IdentityRandomization,
    LeftMatrixScrambleShift,
    PointSetRandomization,
    StripedScrambleShift,
    UniformShift,
)
from .utils import integer_radical_inverse, mod_power, radical_inverse

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "KorobovLatticeSequence",
    "lattice_sequence_coordinate",
    "KorobovLattice",
    "Rank1Lattice",
    "DigitalNet",
    "PointSet",
    "MatrixScrambler",
    "EPSILON_HALF",
    "PointSetRandomization",
    "IdentityRandomization",
    "UniformShift",
    "StripedScrambleShift",
    "LeftMatrixScrambleShift",
    "InvalidArgumentError",
    "UnimplementedError",
    "integer_radical_inverse",
    "radical_inverse",
    "mod_power",
]
