import math

import pytest

from imukit import conversion
from imukit.conversion import to_physical


def test_zero_reading():
    gx, gy, gz, ax, ay, az = to_physical([0, 0, 0, 0, 0, 0])
    assert (gx, gy, gz, ax, az) == (0.0, 0.0, 0.0, 0.0, 0.0)
    assert ay == pytest.approx(conversion.ACC_Y_OFFSET * conversion.G_MPS2)


def test_one_g_on_each_accel_axis():
    lsb = int(conversion.ACCEL_LSB_PER_G)
    _, _, _, ax, _, az = to_physical([0, 0, 0, lsb, 0, -lsb])
    assert ax == pytest.approx(conversion.G_MPS2)
    assert az == pytest.approx(-conversion.G_MPS2)


def test_gyro_full_scale_in_rad_per_second():
    gx, gy, gz, *_ = to_physical([32767, -32768, 164, 0, 0, 0])
    assert gx == pytest.approx(math.radians(32767 / 16.4))
    assert gy == pytest.approx(math.radians(-32768 / 16.4))
    assert gz == pytest.approx(math.radians(10.0))


def test_y_offset_shifts_by_constant():
    lsb = int(conversion.ACCEL_LSB_PER_G)
    _, _, _, ax, ay, _ = to_physical([0, 0, 0, lsb, lsb, 0])
    assert ay - ax == pytest.approx(conversion.ACC_Y_OFFSET * conversion.G_MPS2)


def test_linear_in_raw_counts():
    a = to_physical([100, 200, -300, 1000, 2000, -3000])
    b = to_physical([200, 400, -600, 2000, 4000, -6000])
    for i in (0, 1, 2, 3, 5):
        assert b[i] == pytest.approx(2 * a[i])


def test_accepts_tuple():
    assert to_physical((0, 0, 0, 0, 0, 0))[:4] == (0.0, 0.0, 0.0, 0.0)


@pytest.mark.parametrize("raw", [[], [0] * 5, [0] * 7])
def test_rejects_wrong_length(raw):
    with pytest.raises(ValueError):
        to_physical(raw)