"""Driver for the BMI160 six-axis inertial measurement unit over I2C."""

from __future__ import annotations

import struct
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Protocol

from imukit.registers import (
    ACCEL_BW_MAX,
    ACCEL_BW_MASK,
    ACCEL_ODR_MASK,
    ACCEL_ODR_MAX,
    ACCEL_RANGE_MASK,
    ACCEL_RANGE_MAX,
    ACCEL_UNDERSAMPLING_MASK,
    CHIP_ID,
    DATA_READY_INT_ENABLE_MASK,
    GYRO_BW_MASK,
    GYRO_BW_MAX,
    GYRO_ODR_MASK,
    GYRO_ODR_MAX,
    GYRO_RANGE_MASK,
    GYRO_RANGE_MAX,
    I2C_ADDRESS,
    INT1_DATA_READY_MASK,
    INT1_NON_LATCHED,
    INT1_PUSH_PULL_ACTIVE_HIGH_EDGE,
    SOFT_RESET_CMD,
    SOFT_RESET_DELAY_MS,
    AccelBandwidth,
    AccelOdr,
    AccelPower,
    AccelRange,
    CommunicationError,
    DeviceNotFoundError,
    GyroBandwidth,
    GyroOdr,
    GyroPower,
    GyroRange,
    OutOfRangeError,
    Register,
    SensorConfig,
    decode_error_register,
)

RESET_ACCEL_CONFIG = SensorConfig(
    power=AccelPower.SUSPEND,
    odr=AccelOdr.HZ_100,
    range=AccelRange.G2,
    bw=AccelBandwidth.NORMAL_AVG4,
)
RESET_GYRO_CONFIG = SensorConfig(
    power=GyroPower.SUSPEND,
    odr=GyroOdr.HZ_100,
    range=GyroRange.DPS2000,
    bw=GyroBandwidth.NORMAL,
)
DEFAULT_ACCEL_CONFIG = SensorConfig(
    power=AccelPower.NORMAL,
    odr=AccelOdr.HZ_100,
    range=AccelRange.G2,
    bw=AccelBandwidth.OSR2_AVG2,
)
DEFAULT_GYRO_CONFIG = SensorConfig(
    power=GyroPower.NORMAL,
    odr=GyroOdr.HZ_100,
    range=GyroRange.DPS2000,
    bw=GyroBandwidth.OSR2,
)

_GYRO_POWER_MODES = frozenset(GyroPower)


class I2CBus(Protocol):
    """A bus that can read and write registers of an I2C device."""

    def read(self, address: int, register: int, length: int) -> bytes:
        """Return ``length`` bytes read from ``register`` onwards."""

    def write(self, address: int, register: int, data: bytes) -> None:
        """Write ``data`` starting at ``register``."""


@dataclass(frozen=True)
class SensorSample:
    """One gyro and accelerometer reading in raw counts."""

    gyro: tuple[int, int, int]
    accel: tuple[int, int, int]
    sensor_time: int = 0


def _sleep_ms(milliseconds: float) -> None:
    time.sleep(milliseconds / 1000.0)


class BMI160:
    """BMI160 sensor attached to an I2C bus."""

    def __init__(
        self,
        bus: I2CBus,
        address: int = I2C_ADDRESS,
        *,
        accel_config: SensorConfig = DEFAULT_ACCEL_CONFIG,
        gyro_config: SensorConfig = DEFAULT_GYRO_CONFIG,
        sleep_ms: Callable[[float], None] | None = None,
    ) -> None:
        self.bus = bus
        self.address = address
        self.chip_id: int | None = None
        self._target_accel = accel_config
        self._target_gyro = gyro_config
        self._sleep = sleep_ms if sleep_ms is not None else _sleep_ms
        self.accel_config = RESET_ACCEL_CONFIG
        self.prev_accel_config = RESET_ACCEL_CONFIG
        self.gyro_config = RESET_GYRO_CONFIG
        self.prev_gyro_config = RESET_GYRO_CONFIG

    def init(self) -> None:
        """Check the chip id, reset the sensor and apply the configuration."""
        try:
            chip_id = self._read(Register.CHIP_ID, 1)[0]
        except CommunicationError as exc:
            raise DeviceNotFoundError("no response from sensor") from exc
        if chip_id != CHIP_ID:
            raise DeviceNotFoundError(f"unexpected chip id 0x{chip_id:02X}")
        self.chip_id = chip_id
        self.soft_reset()
        self._configure()

    def soft_reset(self) -> None:
        """Issue a soft reset and restore the power-on configuration."""
        try:
            self._write(Register.COMMAND, bytes([SOFT_RESET_CMD]))
        finally:
            self._sleep(SOFT_RESET_DELAY_MS)
        self.accel_config = RESET_ACCEL_CONFIG
        self.gyro_config = RESET_GYRO_CONFIG
        self.prev_accel_config = self.accel_config
        self.prev_gyro_config = self.gyro_config

    def read_accel_gyro(self) -> SensorSample:
        """Read gyro and accelerometer data."""
        return self._read_sample(with_time=False)

    def read_accel_gyro_with_time(self) -> SensorSample:
        """Read gyro and accelerometer data together with the sensor time."""
        return self._read_sample(with_time=True)

    def enable_data_ready_interrupt(self) -> None:
        """Route the data-ready interrupt to INT1, push-pull, active high, edge."""
        self._write(Register.INT_ENABLE_1, bytes([DATA_READY_INT_ENABLE_MASK]))
        self._write(Register.INT_MAP_1, bytes([INT1_DATA_READY_MASK]))
        self._write(Register.INT_OUT_CTRL, bytes([INT1_PUSH_PULL_ACTIVE_HIGH_EDGE]))
        self._write(Register.INT_LATCH, bytes([INT1_NON_LATCHED]))

    def _read_sample(self, *, with_time: bool) -> SensorSample:
        length = 15 if with_time else 12
        data = self._read(Register.GYRO_DATA, length)
        gx, gy, gz, ax, ay, az = struct.unpack_from("<6h", data)
        sensor_time = int.from_bytes(data[12:15], "little") if with_time else 0
        return SensorSample(gyro=(gx, gy, gz), accel=(ax, ay, az), sensor_time=sensor_time)

    def _configure(self) -> None:
        self.accel_config = self._target_accel
        self.gyro_config = self._target_gyro
        self._set_accel_conf()
        self._set_gyro_conf()
        self._set_accel_power()
        self._set_gyro_power()
        decode_error_register(self._read(Register.ERROR, 1)[0])

    def _set_accel_conf(self) -> None:
        cfg, prev = self.accel_config, self.prev_accel_config
        config, range_byte = self._read(Register.ACCEL_CONFIG, 2)

        if cfg.odr > ACCEL_ODR_MAX:
            raise OutOfRangeError(f"accelerometer ODR out of range: {cfg.odr}")
        if cfg.odr != prev.odr:
            config = (config & ~ACCEL_ODR_MASK & 0xFF) | (cfg.odr & ACCEL_ODR_MASK)

        if cfg.bw > ACCEL_BW_MAX:
            raise OutOfRangeError(f"accelerometer bandwidth out of range: {cfg.bw}")
        if cfg.bw != prev.bw:
            config = (config & ~ACCEL_BW_MASK & 0xFF) | ((cfg.bw << 4) & ACCEL_ODR_MASK)

        if cfg.range > ACCEL_RANGE_MAX:
            raise OutOfRangeError(f"accelerometer range out of range: {cfg.range}")
        if cfg.range != prev.range:
            range_byte = (range_byte & ~ACCEL_RANGE_MASK & 0xFF) | (cfg.range & ACCEL_RANGE_MASK)

        self._write(Register.ACCEL_CONFIG, bytes([config]))
        self.prev_accel_config = replace(self.prev_accel_config, odr=cfg.odr, bw=cfg.bw)
        self._sleep(1)
        self._write(Register.ACCEL_RANGE, bytes([range_byte]))
        self.prev_accel_config = replace(self.prev_accel_config, range=cfg.range)

    def _set_gyro_conf(self) -> None:
        cfg, prev = self.gyro_config, self.prev_gyro_config
        config, range_byte = self._read(Register.GYRO_CONFIG, 2)

        if cfg.odr > GYRO_ODR_MAX:
            raise OutOfRangeError(f"gyroscope ODR out of range: {cfg.odr}")
        if cfg.odr != prev.odr:
            config = (config & ~GYRO_ODR_MASK & 0xFF) | (cfg.odr & GYRO_ODR_MASK)

        if cfg.bw > GYRO_BW_MAX:
            raise OutOfRangeError(f"gyroscope bandwidth out of range: {cfg.bw}")
        config = (config & ~GYRO_BW_MASK & 0xFF) | ((cfg.bw << 4) & GYRO_BW_MASK)

        if cfg.range > GYRO_RANGE_MAX:
            raise OutOfRangeError(f"gyroscope range out of range: {cfg.range}")
        if cfg.range != prev.range:
            range_byte = (range_byte & ~GYRO_RANGE_MASK & 0xFF) | (cfg.range & GYRO_RANGE_MASK)

        self._write(Register.GYRO_CONFIG, bytes([config]))
        self.prev_gyro_config = replace(self.prev_gyro_config, odr=cfg.odr, bw=cfg.bw)
        self._sleep(1)
        self._write(Register.GYRO_RANGE, bytes([range_byte]))
        self.prev_gyro_config = replace(self.prev_gyro_config, range=cfg.range)

    def _set_accel_power(self) -> None:
        power = self.accel_config.power
        if not AccelPower.SUSPEND <= power <= AccelPower.LOW_POWER:
            raise OutOfRangeError(f"accelerometer power mode out of range: 0x{power:02X}")
        if power == self.prev_accel_config.power:
            return
        self._apply_undersampling()
        self._write(Register.COMMAND, bytes([power]))
        if self.prev_accel_config.power == AccelPower.SUSPEND:
            self._sleep(5)
        self.prev_accel_config = replace(self.prev_accel_config, power=power)

    def _apply_undersampling(self) -> None:
        config = self._read(Register.ACCEL_CONFIG, 1)[0]
        if self.accel_config.power == AccelPower.LOW_POWER:
            config = (config & ~ACCEL_UNDERSAMPLING_MASK & 0xFF) | ACCEL_UNDERSAMPLING_MASK
            self._write(Register.ACCEL_CONFIG, bytes([config]))
            # The pre-filter data must be disabled in low-power mode.
            self._write(Register.INT_DATA_0, bytes(2))
        elif config & ACCEL_UNDERSAMPLING_MASK:
            self._write(Register.ACCEL_CONFIG, bytes([config & ~ACCEL_UNDERSAMPLING_MASK & 0xFF]))

    def _set_gyro_power(self) -> None:
        power = self.gyro_config.power
        if power not in _GYRO_POWER_MODES:
            raise OutOfRangeError(f"gyroscope power mode out of range: 0x{power:02X}")
        previous = self.prev_gyro_config.power
        if power == previous:
            return
        self._write(Register.COMMAND, bytes([power]))
        if previous == GyroPower.SUSPEND:
            self._sleep(81)
        elif previous == GyroPower.FAST_STARTUP and power == GyroPower.NORMAL:
            self._sleep(10)
        self.prev_gyro_config = replace(self.prev_gyro_config, power=power)

    def _read(self, register: int, length: int) -> bytes:
        try:
            data = bytes(self.bus.read(self.address, register, length))
        except OSError as exc:
            raise CommunicationError(f"read of register 0x{register:02X} failed") from exc
        finally:
            self._sleep(1)
        if len(data) != length:
            raise CommunicationError(
                f"short read at register 0x{register:02X}: {len(data)} of {length} bytes"
            )
        return data

    def _write(self, register: int, data: bytes) -> None:
        burst = (
            self.prev_accel_config.power == AccelPower.NORMAL
            or self.prev_gyro_config.power == GyroPower.NORMAL
        )
        try:
            if burst:
                self.bus.write(self.address, register, bytes(data))
            else:
                for byte in data:
                    self.bus.write(self.address, register, bytes([byte]))
        except OSError as exc:
            raise CommunicationError(f"write to register 0x{register:02X} failed") from exc
        finally:
            self._sleep(1)