"""A single additive wavetable voice.

The voice keeps a set of per-harmonic phases and builds a band-limited
wavetable from the timbre curves by inverse FFT. About a thousand times a
second the table is rebuilt (moving the harmonic phases on the way), and
playback crossfades from the old table to the new one.
"""

from __future__ import annotations

import math
import random

import numpy as np

from .curve import Curve, CurveInit

_TWO_PI = 2.0 * math.pi


def _round_half_away(values: np.ndarray) -> np.ndarray:
    return np.copysign(np.floor(np.abs(values) + 0.5), values)


def _phase_warp(phases: np.ndarray) -> np.ndarray:
    """Wrap phases into ``[-pi, pi]``."""
    turns = phases / _TWO_PI
    turns = turns - _round_half_away(turns)
    return turns * _TWO_PI


class OgunNote:
    """Wavetable oscillator whose table is resynthesised from harmonic curves."""

    WAVE_TABLE_SIZE = 8192
    FFT_SIZE = WAVE_TABLE_SIZE
    NUM_FFT_BINS = FFT_SIZE // 2 + 1
    NUM_ADJUSTED_BINS = FFT_SIZE // 2
    MIN_HARMONIC_NUM = 4
    MAX_HARMONIC_NUM = 13
    DEFAULT_FFT_SIZE = 1024
    DEFAULT_HARMONIC_NUM = 10

    def __init__(self) -> None:
        self._sample_rate = 0.0
        self._phase = 0.0
        self._phase_inc = 0.0
        self._phase_inc_mul = 0.0
        self._freq = 0.0
        self._volume = 0.0
        self._phase_move = 0.0
        self._phase_move_mul_freq = False

        self._table_a = np.zeros(self.WAVE_TABLE_SIZE + 1)
        self._table_b = np.zeros(self.WAVE_TABLE_SIZE + 1)

        self._bins_changed = False
        self._bin_phases = np.zeros(self.NUM_ADJUSTED_BINS)
        self._phase_seed = 0

        self._num_bins = 0
        self._fft_n = 0
        self._anti_aliasing_bins = 0
        self._use_saw_slope = False
        self._timbre_amp = Curve(self.NUM_ADJUSTED_BINS, CurveInit.FULL)
        self._timbre_formant = Curve(self.NUM_ADJUSTED_BINS, CurveInit.FULL)
        self._phase_move_map = Curve(self.NUM_ADJUSTED_BINS, CurveInit.NULL)

        self._update_counter = 0
        self._samples_per_update = 0
        self._update_rate = 0.0

        self._fading_left = 0
        self._fade_total = 0
        self._fade_counter = 0

    # -- read-only state -------------------------------------------------

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def frequency(self) -> float:
        return self._freq

    @property
    def volume(self) -> float:
        """Linear output gain."""
        return self._volume

    @property
    def harmonic_num(self) -> int:
        return self._fft_n

    @property
    def num_bins(self) -> int:
        """Number of harmonic bins the curves are rendered over."""
        return self._num_bins

    @property
    def anti_aliasing_bins(self) -> int:
        """Harmonic limit computed at the last table update."""
        return self._anti_aliasing_bins

    @property
    def phase_seed(self) -> int:
        return self._phase_seed

    @property
    def bins_changed(self) -> bool:
        return self._bins_changed

    @property
    def samples_per_update(self) -> int:
        return self._samples_per_update

    @property
    def update_rate(self) -> float:
        return self._update_rate

    @property
    def cross_fade_samples(self) -> int:
        return self._fade_total

    @property
    def bin_phases(self) -> np.ndarray:
        """A copy of the current phase of every harmonic bin."""
        return self._bin_phases.copy()

    @property
    def timbre_amp(self) -> Curve:
        return self._timbre_amp

    @property
    def timbre_formant(self) -> Curve:
        return self._timbre_formant

    @property
    def phase_move_map(self) -> Curve:
        return self._phase_move_map

    # -- setup and parameters -------------------------------------------

    def init(self, sample_rate: float) -> None:
        """Prepare for playback at ``sample_rate`` Hz."""
        fs = float(sample_rate)
        frame = int(round(fs / 1000.0))
        if frame < 1:
            raise ValueError(f"sample rate too low: {sample_rate}")
        self._sample_rate = fs
        self._samples_per_update = frame
        self._update_rate = fs / frame
        self._update_counter = 0
        self._fade_total = min(int(fs * 10.0 / 1000.0), frame // 2)

    def set_frequency(self, freq: float) -> None:
        self._freq = float(freq)
        if self._sample_rate > 0:
            self._phase_inc = self._freq * self.WAVE_TABLE_SIZE / self._sample_rate
        else:
            self._phase_inc = 0.0
        if self._calc_anti_aliasing_bins() != self._anti_aliasing_bins:
            self.mark_bins_changed()

    def set_harmonic_num(self, fft_n: int) -> None:
        """Use ``2 ** fft_n / 2`` harmonic bins; above the default the pitch drops by octaves."""
        if not self.MIN_HARMONIC_NUM <= fft_n <= self.MAX_HARMONIC_NUM:
            raise ValueError(
                f"harmonic num must be in {self.MIN_HARMONIC_NUM}..{self.MAX_HARMONIC_NUM}, got {fft_n}"
            )
        self._fft_n = fft_n
        self._num_bins = (1 << fft_n) // 2
        for curve in (self._timbre_amp, self._timbre_formant, self._phase_move_map):
            curve.set_line_resolution(self._num_bins)
        octave_down = max(0, fft_n - self.DEFAULT_HARMONIC_NUM)
        self._phase_inc_mul = 0.5**octave_down

    def set_phase_seed(self, seed: int) -> None:
        """Draw fresh random starting phases for every bin."""
        self._phase_seed = seed
        rng = random.Random(seed)
        self._bin_phases = np.array([rng.random() * _TWO_PI for _ in range(self.NUM_ADJUSTED_BINS)])

    def set_use_saw_slope(self, use_saw_slope: bool) -> None:
        """Roll harmonic amplitudes off as ``1 / n`` like a sawtooth."""
        self._use_saw_slope = bool(use_saw_slope)

    def set_volume(self, db_vol: float) -> None:
        self._volume = 10.0 ** (db_vol / 20.0)

    def set_phase_move(self, move: float) -> None:
        self._phase_move = float(move)

    def set_phase_move_mul_freq(self, mul: bool) -> None:
        self._phase_move_mul_freq = bool(mul)

    def mark_bins_changed(self) -> None:
        self._bins_changed = True

    # -- audio -----------------------------------------------------------

    def process(self, block: np.ndarray) -> np.ndarray:
        """Fill ``block`` (a one-dimensional numpy array) with audio and return it."""
        if not isinstance(block, np.ndarray):
            raise TypeError("block must be a numpy array")
        if self._samples_per_update == 0:
            raise RuntimeError("init() must be called before process()")
        pos = 0
        total = len(block)
        while pos < total:
            if self._update_counter <= 0:
                self._update_wave_table()
                self._update_counter = self._samples_per_update
            size = min(total - pos, self._update_counter)
            self._process_span(block[pos : pos + size])
            pos += size
            self._update_counter -= size
        return block

    def _calc_anti_aliasing_bins(self) -> int:
        true_freq = self._freq * self._phase_inc_mul
        if true_freq <= 0:
            return self.NUM_ADJUSTED_BINS
        max_freq = min(self._sample_rate / 2.0, 20000.0)
        return int(max_freq / true_freq)

    def _update_wave_table(self) -> None:
        self._fade_counter = 0
        self._fading_left = self._fade_total

        self._anti_aliasing_bins = self._calc_anti_aliasing_bins()
        num_bins = max(0, min(self._anti_aliasing_bins, self._num_bins))

        real = np.zeros(self.NUM_FFT_BINS)
        imag = np.zeros(self.NUM_FFT_BINS)
        if num_bins:
            gain_down = (self.FFT_SIZE // 4) / math.sqrt(self._num_bins)
            harmonics = np.arange(1, num_bins + 1, dtype=float)
            e = self._freq / self._sample_rate * math.pi

            step = np.asarray(self._phase_move_map.data[:num_bins]) * self._phase_move * e
            if not self._phase_move_mul_freq:
                step = step * harmonics
            phases = _phase_warp(self._bin_phases[:num_bins] + step)
            self._bin_phases[:num_bins] = phases

            amp = np.asarray(self._timbre_amp.data[:num_bins]) * np.asarray(
                self._timbre_formant.data[:num_bins]
            )
            gain = amp * gain_down
            if self._use_saw_slope:
                gain = gain / harmonics
            real[1 : num_bins + 1] = gain * np.cos(phases)
            imag[1 : num_bins + 1] = gain * np.sin(phases)

        # The top bin is cleared as well: zero padding starts at num_bins.
        real[num_bins:] = 0.0
        imag[num_bins:] = 0.0

        table = np.empty(self.WAVE_TABLE_SIZE + 1)
        table[: self.WAVE_TABLE_SIZE] = np.fft.irfft(real + 1j * imag, n=self.FFT_SIZE)
        table[self.WAVE_TABLE_SIZE] = table[0]
        self._table_b = table

    def _advance(self, count: int) -> np.ndarray:
        inc = self._phase_inc * self._phase_inc_mul
        steps = np.arange(1, count + 1, dtype=float)
        phases = np.mod(self._phase + inc * steps, float(self.WAVE_TABLE_SIZE))
        self._phase = float(phases[-1])
        return phases

    def _read_table(self, table: np.ndarray, phases: np.ndarray) -> np.ndarray:
        idx = np.minimum(phases.astype(np.int64), self.WAVE_TABLE_SIZE - 1)
        frac = phases - idx
        low = table[idx]
        return low + frac * (table[idx + 1] - low)

    def _process_span(self, span: np.ndarray) -> None:
        if self._fading_left != 0:
            self._process_span_cross_fading(span)
        else:
            self._fill_from_table(span)

    def _process_span_cross_fading(self, span: np.ndarray) -> None:
        process_size = min(len(span), self._fading_left)
        self._fading_left -= process_size
        if process_size:
            phases = self._advance(process_size)
            a = self._read_table(self._table_a, phases)
            b = self._read_table(self._table_b, phases)
            p = (self._fade_counter + np.arange(process_size)) / self._fade_total
            self._fade_counter += process_size
            span[:process_size] = (a + p * (b - a)) * self._volume
        if self._fading_left == 0:
            self._table_a, self._table_b = self._table_b, self._table_a
        self._fill_from_table(span[process_size:])

    def _fill_from_table(self, span: np.ndarray) -> None:
        if len(span) == 0:
            return
        phases = self._advance(len(span))
        span[:] = self._read_table(self._table_a, phases) * self._volume