# imukit

Small building blocks for a BMI160 inertial measurement unit:

- `imukit.bmi160`: the `BMI160` driver for the accelerometer and gyroscope. It talks to
  the sensor through any object that implements the `I2CBus` protocol.
- `imukit.conversion`: `to_physical` turns six raw counts into rad/s and m/s².
- `imukit.pid`: `PIDController`, with integrator anti-wind-up, a filtered derivative
  on the measurement and output limits.
- `imukit.rcfilter`: `RCFilter`, a first-order low-pass filter set by a cutoff frequency.
- `imukit.registers`: register addresses, configuration enums, `SensorConfig`,
  `decode_error_register` and the error types.

## Installation

```
pip install .
```

The package needs nothing outside the standard library.

## Reading the sensor

Give the driver an object with `read(address, register, length) -> bytes` and
`write(address, register, data)` methods. Bus failures should be raised as `OSError`.

```python
from imukit.bmi160 import BMI160
from imukit.conversion import to_physical

imu = BMI160(bus)            # default address 0x68; pass address=0x69 for the other one
imu.init()                   # checks the chip id, resets and configures the sensor
imu.enable_data_ready_interrupt()

sample = imu.read_accel_gyro()
gx, gy, gz, ax, ay, az = to_physical((*sample.gyro, *sample.accel))
```

`read_accel_gyro()` returns a `SensorSample` holding `gyro` and `accel` as tuples of raw
counts. `read_accel_gyro_with_time()` also fills in `sensor_time`. `soft_reset()`
resets the sensor and the driver's record of its configuration.

By default `init()` puts both sensors in normal mode at 100 Hz, with a ±2 g
accelerometer range and a ±2000 °/s gyroscope range. Other settings can be passed as
`SensorConfig` values through the `accel_config` and `gyro_config` keyword arguments.
The `sleep_ms` keyword argument replaces the function used for the delays the sensor
needs between commands.

Failures raise a subclass of `imukit.registers.Bmi160Error`:

- `DeviceNotFoundError` when the sensor does not answer or reports the wrong chip id;
- `CommunicationError` when a bus transfer fails or returns too few bytes;
- `OutOfRangeError` when a configuration value is outside its allowed range;
- `InvalidSettingError` when the sensor's error register reports a bad configuration.

## Filtering and control

```python
from imukit.rcfilter import RCFilter
from imukit.pid import PIDController

lowpass = RCFilter(cutoff_hz=5.0, sample_time=0.01)
smooth = lowpass.update(gx)

pid = PIDController(kp=1.2, ki=0.4, kd=0.05, tau=0.02,
                    lim_min=-1.0, lim_max=1.0, sample_time=0.01)
command = pid.update(setpoint=0.0, measurement=smooth)
```

`pid.reset(sample_time)` sets a new sample time and clears the controller's memory.

## What it does not do

The package ships no I²C bus implementation: you supply an object with the `read` and
`write` methods above, backed by whatever bus access your platform offers. There is no
command-line tool; everything is used from Python.

## Tests

```
pip install .[test]
pytest
```