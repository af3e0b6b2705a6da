"""BMI160 IMU driver, raw-to-physical conversion, PID controller and RC low-pass filter."""

__version__ = "0.1.0"
__all__ = ["bmi160", "conversion", "pid", "rcfilter", "registers"]