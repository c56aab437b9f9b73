import math

import pytest

from ogun.audiofft import AudioFFT, complex_size, is_power_of_2

RE_IM = {
    2: ([3.0, -1.0], [0.0, 0.0]),
    4: ([10.0, -2.0, -2.0], [0.0, 2.0, 0.0]),
    8: (
        [36.0, -4.0, -4.0, -4.0, -4.0],
        [0.0, 9.6568546, 4.0, 1.6568543, 0.0],
    ),
    16: (
        [136.0] + [-8.0] * 8,
        [0.0, 40.218716, 19.313709, 11.972846, 8.0, 5.3454289, 3.3137085, 1.5912989, 0.0],
    ),
    32: (
        [528.0] + [-16.0] * 16,
        [0.0, 162.45073, 80.437431, 52.744930, 38.627419, 29.933895, 23.945692, 19.496056,
         16.000000, 13.130860, 10.690858, 8.5521784, 6.6274171, 4.8535471, 3.1825979,
         1.5758624, 0.0],
    ),
    64: (
        [2080.0] + [-32.0] * 32,
        [0.0, 651.37494, 324.90146, 215.72647, 160.87486, 127.75116, 105.48986, 89.434006,
         77.254837, 67.658318, 59.867790, 53.388775, 47.891384, 43.147007, 38.992111,
         35.306561, 32.000000, 29.003109, 26.261721, 23.732817, 21.381716, 19.180061,
         17.104357, 15.134872, 13.254834, 11.449783, 9.7070942, 8.0155830, 6.3651958,
         4.7467518, 3.1517248, 1.5720592, 0.0],
    ),
    128: (
        [8256.0] + [-64.0] * 64,
        [0.0, 2607.0710, 1302.7499, 867.62683, 649.80292, 518.89832, 431.45294, 368.84109,
         321.74973, 285.00494, 255.50232, 231.26628, 210.97972, 193.73076, 178.86801,
         165.91376, 154.50967, 144.38168, 135.31664, 127.14616, 119.73558, 112.97580,
         106.77755, 101.06705, 95.782768, 90.873016, 86.294014, 82.008423, 77.984222,
         74.193787, 70.613121, 67.221306, 64.000000, 60.933064, 58.006218, 55.206779,
         52.523441, 49.946091, 47.465633, 45.073887, 42.763432, 40.527554, 38.360123,
         36.255550, 34.208714, 32.214893, 30.269745, 28.369249, 26.509668, 24.687525,
         22.899567, 21.142744, 19.414188, 17.711185, 16.031166, 14.371680, 12.730392,
         11.105054, 9.4935036, 7.8936472, 6.3034496, 4.7209234, 3.1441183, 1.5711118, 0.0],
    ),
    256: (
        [32896.0] + [-128.0] * 128,
        [0.0, 10429.854, 5214.1421, 3475.2219, 2605.4998, 2083.4570, 1735.2537, 1486.3871,
         1299.6058, 1154.2147, 1037.7966, 942.44965, 862.90588, 795.51843, 737.68219,
         687.48676, 643.49945, 604.62457, 570.00989, 538.98267, 511.00464, 485.64011,
         462.53256, 441.38748, 421.95944, 404.04230, 387.46152, 372.06857, 357.73602,
         344.35406, 331.82751, 320.07346, 309.01935, 298.60141, 288.76337, 279.45544,
         270.63327, 262.25735, 254.29233, 246.70645, 239.47116, 232.56065, 225.95160,
         219.62283, 213.55510, 207.73085, 202.13409, 196.75014, 191.56554, 186.56796,
         181.74603, 177.08928, 172.58803, 168.23331, 164.01685, 159.93094, 155.96844,
         152.12273, 148.38757, 144.75720, 141.22624, 137.78961, 134.44261, 131.18079,
         128.00000, 124.89634, 121.86613, 118.90591, 116.01244, 113.18262, 110.41356,
         107.70251, 105.04688, 102.44421, 99.892181, 97.388565, 94.931267, 92.518303,
         90.147774, 87.817863, 85.526863, 83.273132, 81.055107, 78.871284, 76.720245,
         74.600624, 72.511101, 70.450439, 68.417427, 66.410912, 64.429787, 62.472988,
         60.539490, 58.628311, 56.738499, 54.869133, 53.019337, 51.188248, 49.375050,
         47.578934, 45.799133, 44.034893, 42.285488, 40.550213, 38.828377, 37.119312,
         35.422371, 33.736916, 32.062332, 30.398010, 28.743361, 27.097807, 25.460783,
         23.831732, 22.210108, 20.595375, 18.987007, 17.384483, 15.787294, 14.194933,
         12.606899, 11.022701, 9.4418468, 7.8638530, 6.2882366, 4.7145190, 3.1422236,
         1.5708752, 0.0],
    ),
}


def _approx(values):
    return pytest.approx(values, rel=1e-6, abs=1e-3)


@pytest.mark.parametrize("size", sorted(RE_IM))
def test_forward_matches_reference(size):
    ref_re, ref_im = RE_IM[size]
    fft = AudioFFT(size)
    re, im = fft.fft([float(i + 1) for i in range(size)])
    assert len(re) == complex_size(size)
    assert len(im) == complex_size(size)
    assert re == _approx(ref_re)
    assert im == _approx(ref_im)


@pytest.mark.parametrize("size", sorted(RE_IM))
def test_inverse_restores_input(size):
    data = [float(i + 1) for i in range(size)]
    fft = AudioFFT(size)
    re, im = fft.fft(data)
    assert fft.ifft(re, im) == pytest.approx(data, abs=1e-3)


@pytest.mark.parametrize(
    "val, expected",
    [(1, True), (2, True), (4, True), (1024, True), (3, False), (6, False), (1000, False)],
)
def test_is_power_of_2(val, expected):
    assert is_power_of_2(val) is expected


@pytest.mark.parametrize("size, expected", [(2, 2), (8, 5), (1024, 513), (8192, 4097)])
def test_complex_size(size, expected):
    assert complex_size(size) == expected


@pytest.mark.parametrize("size", [0, 3, 12, 100])
def test_rejects_bad_size(size):
    with pytest.raises(ValueError):
        AudioFFT(size)


def test_init_changes_size():
    fft = AudioFFT(8)
    fft.init(16)
    assert fft.size == 16
    re, _ = fft.fft([1.0] * 16)
    assert re[0] == pytest.approx(16.0)


def test_fft_wrong_length_raises():
    fft = AudioFFT(8)
    with pytest.raises(ValueError):
        fft.fft([0.0] * 4)


def test_ifft_wrong_length_raises():
    fft = AudioFFT(8)
    with pytest.raises(ValueError):
        fft.ifft([0.0] * 4, [0.0] * 5)


def test_cosine_lands_in_single_bin():
    n = 64
    data = [math.cos(2 * math.pi * 3 * i / n) for i in range(n)]
    re, im = AudioFFT(n).fft(data)
    assert re[3] == pytest.approx(n / 2)
    assert sum(abs(v) for k, v in enumerate(re) if k != 3) == pytest.approx(0.0, abs=1e-9)
    assert sum(abs(v) for v in im) == pytest.approx(0.0, abs=1e-9)


def test_ifft_of_single_bin_is_sinusoid():
    n = 32
    bins = complex_size(n)
    re = [0.0] * bins
    im = [0.0] * bins
    re[2] = n / 2
    out = AudioFFT(n).ifft(re, im)
    assert out == pytest.approx([math.cos(2 * math.pi * 2 * i / n) for i in range(n)], abs=1e-9)


def test_dc_and_nyquist_bins():
    n = 16
    re, im = AudioFFT(n).fft([1.0 if i % 2 == 0 else -1.0 for i in range(n)])
    assert re[0] == pytest.approx(0.0, abs=1e-9)
    assert re[n // 2] == pytest.approx(float(n))
    assert im[0] == 0.0
    assert im[n // 2] == 0.0