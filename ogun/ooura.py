"""Real-input FFT based on Takuya Ooura's split-radix routines.

The transform works on a flat list of ``size`` doubles in Ooura's packed
layout: ``a[0]`` holds the DC term, ``a[1]`` the Nyquist term, and for
``0 < k < size / 2`` the pair ``a[2k], a[2k + 1]`` holds
``sum x[j] * cos(2 pi j k / n)`` and ``sum x[j] * sin(2 pi j k / n)``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, MutableSequence

_Twiddle = tuple[float, float]
_UNIT: _Twiddle = (1.0, 0.0)


def _swap_pairs(a: MutableSequence[float], i: int, j: int) -> None:
    a[i], a[i + 1], a[j], a[j + 1] = a[j], a[j + 1], a[i], a[i + 1]


def _bitrv2(n: int, ip: MutableSequence[int], a: MutableSequence[float]) -> None:
    """Bit-reversal permutation of the complex pairs in ``a``."""
    ip[0] = 0
    l = n
    m = 1
    while (m << 3) < l:
        l >>= 1
        for j in range(m):
            ip[m + j] = ip[j] + l
        m <<= 1
    m2 = 2 * m
    if (m << 3) == l:
        for k in range(m):
            for j in range(k):
                j1 = 2 * j + ip[k]
                k1 = 2 * k + ip[j]
                _swap_pairs(a, j1, k1)
                j1 += m2
                k1 += 2 * m2
                _swap_pairs(a, j1, k1)
                j1 += m2
                k1 -= m2
                _swap_pairs(a, j1, k1)
                j1 += m2
                k1 += 2 * m2
                _swap_pairs(a, j1, k1)
            j1 = 2 * k + m2 + ip[k]
            _swap_pairs(a, j1, j1 + m2)
    else:
        for k in range(1, m):
            for j in range(k):
                j1 = 2 * j + ip[k]
                k1 = 2 * k + ip[j]
                _swap_pairs(a, j1, k1)
                _swap_pairs(a, j1 + m2, k1 + m2)


def _butterfly(
    a: MutableSequence[float],
    j0: int,
    j1: int,
    j2: int,
    j3: int,
    w1: _Twiddle = _UNIT,
    w2: _Twiddle = _UNIT,
    w3: _Twiddle = _UNIT,
) -> None:
    """Forward radix-4 butterfly with twiddle factors on three outputs."""
    x0r = a[j0] + a[j1]
    x0i = a[j0 + 1] + a[j1 + 1]
    x1r = a[j0] - a[j1]
    x1i = a[j0 + 1] - a[j1 + 1]
    x2r = a[j2] + a[j3]
    x2i = a[j2 + 1] + a[j3 + 1]
    x3r = a[j2] - a[j3]
    x3i = a[j2 + 1] - a[j3 + 1]
    a[j0] = x0r + x2r
    a[j0 + 1] = x0i + x2i
    x0r -= x2r
    x0i -= x2i
    a[j2] = w2[0] * x0r - w2[1] * x0i
    a[j2 + 1] = w2[0] * x0i + w2[1] * x0r
    x0r = x1r - x3i
    x0i = x1i + x3r
    a[j1] = w1[0] * x0r - w1[1] * x0i
    a[j1 + 1] = w1[0] * x0i + w1[1] * x0r
    x0r = x1r + x3i
    x0i = x1i - x3r
    a[j3] = w3[0] * x0r - w3[1] * x0i
    a[j3 + 1] = w3[0] * x0i + w3[1] * x0r


def _eighth_turn(wk1r: float) -> tuple[_Twiddle, _Twiddle, _Twiddle]:
    return (wk1r, wk1r), (0.0, 1.0), (-wk1r, wk1r)


def _twiddles(w: MutableSequence[float], k1: int) -> tuple[_Twiddle, _Twiddle, _Twiddle, _Twiddle, _Twiddle, _Twiddle]:
    """Twiddles for the two half-groups that share ``w[k1]``."""
    k2 = 2 * k1
    wk2r, wk2i = w[k1], w[k1 + 1]
    wk1r, wk1i = w[k2], w[k2 + 1]
    first = ((wk1r, wk1i), (wk2r, wk2i), (wk1r - 2 * wk2i * wk1i, 2 * wk2i * wk1r - wk1i))
    wk1r, wk1i = w[k2 + 2], w[k2 + 3]
    second = ((wk1r, wk1i), (-wk2i, wk2r), (wk1r - 2 * wk2r * wk1i, 2 * wk2r * wk1r - wk1i))
    return first + second


def _cft1st(n: int, a: MutableSequence[float], w: MutableSequence[float]) -> None:
    _butterfly(a, 0, 2, 4, 6)
    _butterfly(a, 8, 10, 12, 14, *_eighth_turn(w[2]))
    k1 = 0
    for j in range(16, n, 16):
        k1 += 2
        w1, w2, w3, v1, v2, v3 = _twiddles(w, k1)
        _butterfly(a, j, j + 2, j + 4, j + 6, w1, w2, w3)
        _butterfly(a, j + 8, j + 10, j + 12, j + 14, v1, v2, v3)


def _cftmdl(n: int, l: int, a: MutableSequence[float], w: MutableSequence[float]) -> None:
    m = l << 2
    for j in range(0, l, 2):
        _butterfly(a, j, j + l, j + 2 * l, j + 3 * l)
    eighth = _eighth_turn(w[2])
    for j in range(m, l + m, 2):
        _butterfly(a, j, j + l, j + 2 * l, j + 3 * l, *eighth)
    k1 = 0
    m2 = 2 * m
    for k in range(m2, n, m2):
        k1 += 2
        w1, w2, w3, v1, v2, v3 = _twiddles(w, k1)
        for j in range(k, l + k, 2):
            _butterfly(a, j, j + l, j + 2 * l, j + 3 * l, w1, w2, w3)
        for j in range(k + m, l + k + m, 2):
            _butterfly(a, j, j + l, j + 2 * l, j + 3 * l, v1, v2, v3)


def _cft_stages(n: int, a: MutableSequence[float], w: MutableSequence[float]) -> int:
    l = 2
    if n > 8:
        _cft1st(n, a, w)
        l = 8
        while (l << 2) < n:
            _cftmdl(n, l, a, w)
            l <<= 2
    return l


def _cftfsub(n: int, a: MutableSequence[float], w: MutableSequence[float]) -> None:
    l = _cft_stages(n, a, w)
    if (l << 2) == n:
        for j in range(0, l, 2):
            _butterfly(a, j, j + l, j + 2 * l, j + 3 * l)
    else:
        for j in range(0, l, 2):
            j1 = j + l
            x0r = a[j] - a[j1]
            x0i = a[j + 1] - a[j1 + 1]
            a[j] += a[j1]
            a[j + 1] += a[j1 + 1]
            a[j1] = x0r
            a[j1 + 1] = x0i


def _cftbsub(n: int, a: MutableSequence[float], w: MutableSequence[float]) -> None:
    l = _cft_stages(n, a, w)
    if (l << 2) == n:
        for j in range(0, l, 2):
            j1 = j + l
            j2 = j1 + l
            j3 = j2 + l
            x0r = a[j] + a[j1]
            x0i = -a[j + 1] - a[j1 + 1]
            x1r = a[j] - a[j1]
            x1i = -a[j + 1] + a[j1 + 1]
            x2r = a[j2] + a[j3]
            x2i = a[j2 + 1] + a[j3 + 1]
            x3r = a[j2] - a[j3]
            x3i = a[j2 + 1] - a[j3 + 1]
            a[j] = x0r + x2r
            a[j + 1] = x0i - x2i
            a[j2] = x0r - x2r
            a[j2 + 1] = x0i + x2i
            a[j1] = x1r - x3i
            a[j1 + 1] = x1i - x3r
            a[j3] = x1r + x3i
            a[j3 + 1] = x1i + x3r
    else:
        for j in range(0, l, 2):
            j1 = j + l
            x0r = a[j] - a[j1]
            x0i = -a[j + 1] + a[j1 + 1]
            a[j] += a[j1]
            a[j + 1] = -a[j + 1] - a[j1 + 1]
            a[j1] = x0r
            a[j1 + 1] = x0i


def _rftfsub(n: int, a: MutableSequence[float], nc: int, c: MutableSequence[float]) -> None:
    m = n >> 1
    ks = 2 * nc // m
    kk = 0
    for j in range(2, m, 2):
        k = n - j
        kk += ks
        wkr = 0.5 - c[nc - kk]
        wki = c[kk]
        xr = a[j] - a[k]
        xi = a[j + 1] + a[k + 1]
        yr = wkr * xr - wki * xi
        yi = wkr * xi + wki * xr
        a[j] -= yr
        a[j + 1] -= yi
        a[k] += yr
        a[k + 1] -= yi


def _rftbsub(n: int, a: MutableSequence[float], nc: int, c: MutableSequence[float]) -> None:
    a[1] = -a[1]
    m = n >> 1
    ks = 2 * nc // m
    kk = 0
    for j in range(2, m, 2):
        k = n - j
        kk += ks
        wkr = 0.5 - c[nc - kk]
        wki = c[kk]
        xr = a[j] - a[k]
        xi = a[j + 1] + a[k + 1]
        yr = wkr * xr + wki * xi
        yi = wkr * xi - wki * xr
        a[j] -= yr
        a[j + 1] = yi - a[j + 1]
        a[k] += yr
        a[k + 1] = yi - a[k + 1]
    a[m + 1] = -a[m + 1]


class OouraFFT:
    """Real discrete Fourier transform of a fixed power-of-two size."""

    def __init__(self, size: int) -> None:
        if size < 2 or size & (size - 1):
            raise ValueError(f"FFT size must be a power of two of at least 2, got {size}")
        self.size = size
        self._work = [0] * max(1, math.isqrt(size))
        quarter = size // 4
        self._w = self._make_wt(quarter)
        self._nc = quarter
        self._c = self._make_ct(quarter)

    def _make_wt(self, nw: int) -> list[float]:
        w = [0.0] * nw
        if nw > 2:
            nwh = nw >> 1
            delta = math.atan(1.0) / nwh
            w[0] = 1.0
            w[1] = 0.0
            w[nwh] = math.cos(delta * nwh)
            w[nwh + 1] = w[nwh]
            if nwh > 2:
                for j in range(2, nwh, 2):
                    x = math.cos(delta * j)
                    y = math.sin(delta * j)
                    w[j] = x
                    w[j + 1] = y
                    w[nw - j] = y
                    w[nw - j + 1] = x
                _bitrv2(nw, self._work, w)
        return w

    @staticmethod
    def _make_ct(nc: int) -> list[float]:
        c = [0.0] * nc
        if nc > 1:
            nch = nc >> 1
            delta = math.atan(1.0) / nch
            c[0] = math.cos(delta * nch)
            c[nch] = 0.5 * c[0]
            for j in range(1, nch):
                c[j] = 0.5 * math.cos(delta * j)
                c[nc - j] = 0.5 * math.sin(delta * j)
        return c

    def rdft(self, isgn: int, a: Iterable[float]) -> list[float]:
        """Transform ``a`` and return the result as a new list.

        With ``isgn >= 0`` the input is real samples and the output is in
        packed spectral layout; with ``isgn < 0`` the direction is reversed
        and the result is ``size / 2`` times the original samples.
        """
        data = [float(v) for v in a]
        n = self.size
        if len(data) != n:
            raise ValueError(f"expected {n} values, got {len(data)}")
        if isgn >= 0:
            if n > 4:
                _bitrv2(n, self._work, data)
                _cftfsub(n, data, self._w)
                _rftfsub(n, data, self._nc, self._c)
            elif n == 4:
                _cftfsub(n, data, self._w)
            xi = data[0] - data[1]
            data[0] += data[1]
            data[1] = xi
        else:
            data[1] = 0.5 * (data[0] - data[1])
            data[0] -= data[1]
            if n > 4:
                _rftbsub(n, data, self._nc, self._c)
                _bitrv2(n, self._work, data)
                _cftbsub(n, data, self._w)
            elif n == 4:
                _cftfsub(n, data, self._w)
        return data