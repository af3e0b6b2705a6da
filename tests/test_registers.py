import dataclasses

import pytest

from imukit import registers
from imukit.registers import (
    AccelOdr,
    AccelPower,
    AccelRange,
    Bmi160Error,
    CommunicationError,
    DeviceNotFoundError,
    GyroOdr,
    GyroPower,
    GyroRange,
    InvalidSettingError,
    OutOfRangeError,
    Register,
    SensorConfig,
    decode_error_register,
)


@pytest.mark.parametrize(
    "address, expected",
    [
        (0x00, Register.CHIP_ID),
        (0x0C, Register.GYRO_DATA),
        (0x40, Register.ACCEL_CONFIG),
        (0x7E, Register.COMMAND),
    ],
)
def test_register_lookup_by_address(address, expected):
    assert Register(address) is expected


@pytest.mark.parametrize(
    "enum_cls, value, expected",
    [
        (AccelPower, 0x11, AccelPower.NORMAL),
        (AccelPower, 0x12, AccelPower.LOW_POWER),
        (GyroPower, 0x17, GyroPower.FAST_STARTUP),
        (AccelRange, 0x0C, AccelRange.G16),
        (GyroRange, 0x04, GyroRange.DPS125),
        (AccelOdr, 0x08, AccelOdr.HZ_100),
        (GyroOdr, 0x08, GyroOdr.HZ_100),
    ],
)
def test_enum_lookup_by_value(enum_cls, value, expected):
    assert enum_cls(value) is expected


@pytest.mark.parametrize(
    "enum_cls, limit",
    [
        (AccelOdr, registers.ACCEL_ODR_MAX),
        (GyroOdr, registers.GYRO_ODR_MAX),
        (GyroRange, registers.GYRO_RANGE_MAX),
    ],
)
def test_limits_are_largest_members(enum_cls, limit):
    assert enum_cls(limit) is max(enum_cls)


@pytest.mark.parametrize(
    "error_code, expected_code",
    [(1, -6), (2, -7), (3, -8), (7, -9)],
)
def test_decode_error_register_raises_for_invalid_settings(error_code, expected_code):
    with pytest.raises(InvalidSettingError) as info:
        decode_error_register(error_code << 1)
    assert info.value.code == expected_code
    assert info.value.error_code == error_code


def test_decode_error_register_ignores_bit_zero():
    with pytest.raises(InvalidSettingError) as info:
        decode_error_register((1 << 1) | 0x01)
    assert info.value.error_code == 1


@pytest.mark.parametrize("error_code", [0, 4, 5, 6, 8, 15])
def test_decode_error_register_returns_other_codes(error_code):
    assert decode_error_register(error_code << 1) == error_code


def test_decode_error_register_masks_high_bits():
    assert decode_error_register(0x20) == 0
    assert decode_error_register(0x80 | (4 << 1)) == 4


@pytest.mark.parametrize("value", [-1, 256])
def test_decode_error_register_rejects_non_bytes(value):
    with pytest.raises(ValueError):
        decode_error_register(value)


@pytest.mark.parametrize(
    "error_cls, expected_code",
    [
        (CommunicationError, -2),
        (DeviceNotFoundError, -3),
        (OutOfRangeError, -4),
    ],
)
def test_error_instances_carry_codes(error_cls, expected_code):
    error = error_cls()
    assert isinstance(error, Bmi160Error)
    assert error.code == expected_code


def test_invalid_setting_error_is_bmi160_error():
    with pytest.raises(Bmi160Error) as info:
        decode_error_register(2 << 1)
    assert isinstance(info.value, InvalidSettingError)
    assert info.value.error_code == 2


def test_sensor_config_is_immutable_value():
    cfg = SensorConfig(AccelPower.NORMAL, AccelOdr.HZ_100, AccelRange.G2, 1)
    changed = dataclasses.replace(cfg, range=AccelRange.G4)
    assert cfg.range == AccelRange.G2
    assert changed.range == AccelRange.G4
    assert changed == SensorConfig(AccelPower.NORMAL, AccelOdr.HZ_100, AccelRange.G4, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.power = AccelPower.SUSPEND