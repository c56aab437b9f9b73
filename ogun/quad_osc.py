"""Quadrature sine oscillator built from three shears per step."""

from __future__ import annotations

import math


class QuadOsc:
    """Rotates the state vector ``(u, v)`` by a fixed angle on every tick."""

    def __init__(self) -> None:
        self._k1 = 0.0
        self._k2 = 0.0
        self._u = 0.0
        self._v = 0.0

    def reset(self) -> None:
        """Start again from ``u = 1, v = 0``."""
        self._u = 1.0
        self._v = 0.0

    def set_freq(self, omega: float) -> None:
        """Set the angle advanced per tick, in radians."""
        self._k1 = math.tan(omega / 2.0)
        self._k2 = 2.0 * self._k1 / (1.0 + self._k1 * self._k1)

    def tick(self) -> None:
        """Advance the oscillator by one step."""
        w = self._u - self._k1 * self._v
        self._v = self._v + self._k2 * w
        self._u = w - self._k1 * self._v

    @property
    def sine(self) -> float:
        return self._u

    @property
    def cosine(self) -> float:
        return self._v