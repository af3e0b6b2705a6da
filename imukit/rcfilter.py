"""First-order RC low-pass filter."""

from __future__ import annotations

import math


class RCFilter:
    """Discrete first-order low-pass filter set by a cutoff frequency."""

    def __init__(self, cutoff_hz: float, sample_time: float) -> None:
        rc = 1.0 / (2.0 * math.pi * cutoff_hz)
        self.coefficients = (
            sample_time / (sample_time + rc),
            rc / (sample_time + rc),
        )
        self.output = 0.0
        self.previous = 0.0

    def update(self, value: float) -> float:
        """Feed one input sample and return the filtered sample."""
        self.previous = self.output
        gain_in, gain_prev = self.coefficients
        self.output = gain_in * value + gain_prev * self.previous
        return self.output