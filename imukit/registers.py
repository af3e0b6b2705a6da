"""Register map, configuration values and error types of the BMI160 IMU."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

CHIP_ID = 0xD1
SOFT_RESET_CMD = 0xB6
SOFT_RESET_DELAY_MS = 15
I2C_ADDRESS = 0x68

ACCEL_BW_MASK = 0x70
ACCEL_ODR_MASK = 0x0F
ACCEL_UNDERSAMPLING_MASK = 0x80
ACCEL_RANGE_MASK = 0x0F
GYRO_BW_MASK = 0x30
GYRO_ODR_MASK = 0x0F
GYRO_RANGE_MASK = 0x07

ACCEL_ODR_MAX = 15
ACCEL_BW_MAX = 2
ACCEL_RANGE_MAX = 12
GYRO_ODR_MAX = 13
GYRO_BW_MAX = 2
GYRO_RANGE_MAX = 4

ACCEL_SEL = 0x01
GYRO_SEL = 0x02
TIME_SEL = 0x04
SENSOR_SELECT_MASK = 0x07

DATA_READY_INT_ENABLE_MASK = 0x10
INT1_DATA_READY_MASK = 0x80
INT1_PUSH_PULL_ACTIVE_HIGH_EDGE = 0x0B
INT1_NON_LATCHED = 0x00

ERROR_REGISTER_MASK = 0x0F

ACCEL_ODR_BW_INVALID = 1
GYRO_ODR_BW_INVALID = 2
LOW_POWER_PRE_FILTER_INT_INVALID = 3
LOW_POWER_PRE_FILTER_INVALID = 7


class Register(IntEnum):
    """Register addresses."""

    CHIP_ID = 0x00
    ERROR = 0x02
    GYRO_DATA = 0x0C
    ACCEL_DATA = 0x12
    ACCEL_CONFIG = 0x40
    ACCEL_RANGE = 0x41
    GYRO_CONFIG = 0x42
    GYRO_RANGE = 0x43
    INT_ENABLE_1 = 0x51
    INT_OUT_CTRL = 0x53
    INT_LATCH = 0x54
    INT_MAP_1 = 0x56
    INT_DATA_0 = 0x58
    COMMAND = 0x7E


class AccelPower(IntEnum):
    """Accelerometer power-mode commands."""

    SUSPEND = 0x10
    NORMAL = 0x11
    LOW_POWER = 0x12


class GyroPower(IntEnum):
    """Gyroscope power-mode commands."""

    SUSPEND = 0x14
    NORMAL = 0x15
    FAST_STARTUP = 0x17


class AccelRange(IntEnum):
    """Accelerometer full-scale range settings."""

    G2 = 0x03
    G4 = 0x05
    G8 = 0x08
    G16 = 0x0C


class GyroRange(IntEnum):
    """Gyroscope full-scale range settings."""

    DPS2000 = 0x00
    DPS1000 = 0x01
    DPS500 = 0x02
    DPS250 = 0x03
    DPS125 = 0x04


class AccelBandwidth(IntEnum):
    """Accelerometer bandwidth / averaging settings."""

    OSR4_AVG1 = 0x00
    OSR2_AVG2 = 0x01
    NORMAL_AVG4 = 0x02
    RES_AVG8 = 0x03
    RES_AVG16 = 0x04
    RES_AVG32 = 0x05
    RES_AVG64 = 0x06
    RES_AVG128 = 0x07


class GyroBandwidth(IntEnum):
    """Gyroscope bandwidth settings."""

    OSR4 = 0x00
    OSR2 = 0x01
    NORMAL = 0x02


class AccelOdr(IntEnum):
    """Accelerometer output data rates."""

    RESERVED = 0x00
    HZ_0_78 = 0x01
    HZ_1_56 = 0x02
    HZ_3_12 = 0x03
    HZ_6_25 = 0x04
    HZ_12_5 = 0x05
    HZ_25 = 0x06
    HZ_50 = 0x07
    HZ_100 = 0x08
    HZ_200 = 0x09
    HZ_400 = 0x0A
    HZ_800 = 0x0B
    HZ_1600 = 0x0C
    RESERVED0 = 0x0D
    RESERVED1 = 0x0E
    RESERVED2 = 0x0F


class GyroOdr(IntEnum):
    """Gyroscope output data rates."""

    RESERVED = 0x00
    HZ_25 = 0x06
    HZ_50 = 0x07
    HZ_100 = 0x08
    HZ_200 = 0x09
    HZ_400 = 0x0A
    HZ_800 = 0x0B
    HZ_1600 = 0x0C
    HZ_3200 = 0x0D


@dataclass(frozen=True)
class SensorConfig:
    """Power mode, output data rate, range and bandwidth of one sensor."""

    power: int
    odr: int
    range: int
    bw: int


class Bmi160Error(Exception):
    """Base class of all sensor errors."""

    code = -1


class CommunicationError(Bmi160Error):
    """The bus transfer failed."""

    code = -2


class DeviceNotFoundError(Bmi160Error):
    """No BMI160 answered with the expected chip id."""

    code = -3


class OutOfRangeError(Bmi160Error):
    """A configuration value lies outside the allowed range."""

    code = -4


_INVALID_SETTINGS = {
    ACCEL_ODR_BW_INVALID: (-6, "invalid accelerometer ODR/bandwidth combination"),
    GYRO_ODR_BW_INVALID: (-7, "invalid gyroscope ODR/bandwidth combination"),
    LOW_POWER_PRE_FILTER_INT_INVALID: (-8, "low-power pre-filter interrupt invalid"),
    LOW_POWER_PRE_FILTER_INVALID: (-9, "low-power pre-filter invalid"),
}


class InvalidSettingError(Bmi160Error):
    """The sensor flagged the current configuration as invalid."""

    def __init__(self, error_code: int) -> None:
        code, message = _INVALID_SETTINGS[error_code]
        super().__init__(message)
        self.code = code
        self.error_code = error_code


def decode_error_register(value: int) -> int:
    """Decode the ERR_REG byte.

    Returns the 4-bit error code, raising InvalidSettingError for the codes
    that mark an invalid configuration.
    """
    if not 0 <= value <= 0xFF:
        raise ValueError(f"register value out of byte range: {value}")
    error_code = (value >> 1) & ERROR_REGISTER_MASK
    if error_code in _INVALID_SETTINGS:
        raise InvalidSettingError(error_code)
    return error_code