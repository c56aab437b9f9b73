"""Real-to-complex FFT with split real/imaginary spectra.

Spectra have ``size // 2 + 1`` bins running from DC to Nyquist. ``fft``
returns unscaled sums and ``ifft`` scales by ``1 / size``, so an ``fft``
followed by an ``ifft`` gives back the original samples.
"""

from __future__ import annotations

from collections.abc import Iterable

from .ooura import OouraFFT


def is_power_of_2(val: int) -> bool:
    """Return whether ``val`` has at most one bit set."""
    return val == 1 or (val & (val - 1)) == 0


def complex_size(size: int) -> int:
    """Number of spectral bins for ``size`` real samples."""
    return size // 2 + 1


class AudioFFT:
    """Forward and inverse real FFT of a fixed power-of-two size."""

    def __init__(self, size: int) -> None:
        self._impl: OouraFFT | None = None
        self.init(size)

    @property
    def size(self) -> int:
        """Number of real samples per transform."""
        assert self._impl is not None
        return self._impl.size

    def init(self, size: int) -> None:
        """Prepare the transform for ``size`` samples; ``size`` must be a power of two."""
        if not is_power_of_2(size):
            raise ValueError(f"FFT size must be a power of two, got {size}")
        if self._impl is None or self._impl.size != size:
            self._impl = OouraFFT(size)

    def fft(self, data: Iterable[float]) -> tuple[list[float], list[float]]:
        """Return the real and imaginary parts of the spectrum of ``data``."""
        assert self._impl is not None
        packed = self._impl.rdft(1, data)
        re = packed[0::2] + [packed[1]]
        im = [0.0] + [-v for v in packed[3::2]] + [0.0]
        return re, im

    def ifft(self, re: Iterable[float], im: Iterable[float]) -> list[float]:
        """Return the real samples whose spectrum is ``re`` + i ``im``."""
        assert self._impl is not None
        n = self._impl.size
        bins = complex_size(n)
        real = [float(v) for v in re]
        imag = [float(v) for v in im]
        if len(real) != bins or len(imag) != bins:
            raise ValueError(
                f"expected {bins} bins, got {len(real)} real and {len(imag)} imaginary"
            )
        half = n // 2
        packed: list[float] = []
        for r, i in zip(real[:half], imag[:half]):
            packed.append(r)
            packed.append(-i)
        packed[1] = real[half]
        scale = 2.0 / n
        return [v * scale for v in self._impl.rdft(-1, packed)]