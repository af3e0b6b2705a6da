[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imukit"
version = "0.1.0"
description = "BMI160 IMU driver over an abstract I2C bus, with a PID controller and an RC low-pass filter"
requires-python = ">=3.10"
dependencies = []
keywords = ["bmi160", "imu", "accelerometer", "gyroscope", "i2c", "pid", "low-pass filter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["imukit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
