"""Conversion of raw BMI160 readings to physical units."""

from __future__ import annotations

from collections.abc import Sequence

DPS_TO_RPS = 0.01745329251994329576
G_MPS2 = 9.81

GYRO_LSB_PER_DPS = 16.4
ACCEL_LSB_PER_G = 16384.0

GYRO_X_OFFSET = 9
GYRO_Y_OFFSET = -4
GYRO_Z_OFFSET = -7
ACC_X_OFFSET = -0.03
ACC_Y_OFFSET = 0.07
ACC_Z_OFFSET = -0.03


def to_physical(raw: Sequence[int]) -> tuple[float, float, float, float, float, float]:
    """Convert raw (gx, gy, gz, ax, ay, az) counts.

    Gyro rates come back in rad/s and accelerations in m/s^2, with the
    Y-axis accelerometer offset applied.
    """
    if len(raw) != 6:
        raise ValueError(f"expected 6 raw values, got {len(raw)}")
    gx, gy, gz, ax, ay, az = raw
    return (
        gx / GYRO_LSB_PER_DPS * DPS_TO_RPS,
        gy / GYRO_LSB_PER_DPS * DPS_TO_RPS,
        gz / GYRO_LSB_PER_DPS * DPS_TO_RPS,
        ax / ACCEL_LSB_PER_G * G_MPS2,
        (ay / ACCEL_LSB_PER_G + ACC_Y_OFFSET) * G_MPS2,
        az / ACCEL_LSB_PER_G * G_MPS2,
    )