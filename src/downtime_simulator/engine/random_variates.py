"""Random-variate generation — Box-Muller normal draws over a pluggable uniform source.

The uniform source is injected so tests can swap the production numpy
generator for a seeded or fixed-sequence one.  Everything above this module
(trials, sensitivity sweeps) consumes randomness only through
:class:`RandomVariateGenerator`.

Box-Muller (cosine branch):
  z = sqrt(−2·ln u) · cos(2π·v),   u, v ~ U(0, 1)
  x = mean + z · stddev
A uniform of exactly 0 is redrawn, since ln(0) is undefined.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Protocol

import numpy as np


class UniformSource(Protocol):
    """Anything that yields floats in [0, 1)."""

    def next_uniform(self) -> float:
        ...


class NumpyUniformSource:
    """Production uniform source backed by ``numpy.random.Generator``.

    Parameters
    ----------
    rng : np.random.Generator | None
        Generator to draw from.  ``None`` creates an unseeded one.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def from_seed(cls, seed: int | None) -> NumpyUniformSource:
        return cls(np.random.default_rng(seed))

    def next_uniform(self) -> float:
        return float(self._rng.random())


class SequenceUniformSource:
    """Replays a fixed sequence of uniforms, cycling when exhausted.

    Handy for pinning exact draws in tests::

        source = SequenceUniformSource([0.5, 0.25])
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values = [float(v) for v in values]
        if not self._values:
            raise ValueError("SequenceUniformSource needs at least one value")
        for v in self._values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"uniform values must lie in [0, 1), got {v}")
        self._pos = 0

    def next_uniform(self) -> float:
        value = self._values[self._pos]
        self._pos = (self._pos + 1) % len(self._values)
        return value


class RandomVariateGenerator:
    """Normal variates N(mean, stddev²) via the Box-Muller transform.

    Usage::

        gen = RandomVariateGenerator(NumpyUniformSource.from_seed(42))
        x = gen.sample(1000.0, 100.0)
    """

    def __init__(self, source: UniformSource | None = None) -> None:
        self._source = source if source is not None else NumpyUniformSource()

    @property
    def source(self) -> UniformSource:
        return self._source

    def _nonzero_uniform(self) -> float:
        u = 0.0
        while u == 0.0:
            u = self._source.next_uniform()
        return u

    def standard_normal(self) -> float:
        """One draw from N(0, 1)."""
        u = self._nonzero_uniform()
        v = self._nonzero_uniform()
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

    def sample(self, mean: float, std_dev: float) -> float:
        """One draw from N(mean, std_dev²).

        ``std_dev == 0`` returns ``mean`` exactly without consuming any
        uniforms.  The result is not clamped: callers modelling quantities
        that cannot go negative clamp it themselves.
        """
        if std_dev == 0:
            return mean
        return mean + self.standard_normal() * std_dev
