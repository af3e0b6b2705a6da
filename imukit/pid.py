"""Discrete PID controller with filtered derivative and anti-windup."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PIDController:
    """PID controller using trapezoidal integration and a band-limited derivative.

    The derivative acts on the measurement, and the integrator is clamped
    dynamically so that it cannot wind up past the output limits.
    """

    kp: float
    ki: float
    kd: float
    tau: float
    lim_min: float
    lim_max: float
    sample_time: float
    integrator: float = field(default=0.0, init=False)
    prev_error: float = field(default=0.0, init=False)
    differentiator: float = field(default=0.0, init=False)
    prev_measurement: float = field(default=0.0, init=False)
    out: float = field(default=0.0, init=False)

    def reset(self, sample_time: float) -> None:
        """Set the sampling period and clear the controller memory."""
        self.sample_time = sample_time
        self.integrator = 0.0
        self.prev_error = 0.0
        self.differentiator = 0.0
        self.prev_measurement = 0.0
        self.out = 0.0

    def update(self, setpoint: float, measurement: float) -> float:
        """Advance the controller by one sample and return the limited output."""
        t = self.sample_time
        error = setpoint - measurement
        proportional = self.kp * error

        self.integrator += 0.5 * self.ki * t * (error + self.prev_error)

        lim_max_int = self.lim_max - proportional if self.lim_max > proportional else 0.0
        lim_min_int = self.lim_min - proportional if self.lim_min < proportional else 0.0

        if self.integrator > lim_max_int:
            self.integrator = lim_max_int
        elif self.integrator < lim_min_int:
            self.integrator = lim_min_int

        self.differentiator = -(
            2.0 * self.kd * (measurement - self.prev_measurement)
            + (2.0 * self.tau - t) * self.differentiator
        ) / (2.0 * self.tau + t)

        out = proportional + self.integrator + self.differentiator
        self.out = min(max(out, self.lim_min), self.lim_max)

        self.prev_error = error
        self.prev_measurement = measurement
        return self.out