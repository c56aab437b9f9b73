"""The synthesiser engine as a host would drive it: parameters plus audio blocks."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Union

import numpy as np

from .curve import Curve, CurveListener, Point
from .note import OgunNote

FREQ = "freq"
HARMONIC_NUM = "harmonic_num"
PHASE_SEED = "phase_seed"
SAW_SLOPE = "saw_slope"
VOLUME = "volume"
PHASE_MOVE = "phase_move"
PHASE_MOVE_MUL_FREQ = "phmove_mulfreq"


def _ignore(_value: Any) -> None:
    pass


@dataclass
class FloatParameter:
    """A continuous parameter clamped to ``[minimum, maximum]``."""

    id: str
    name: str
    minimum: float
    maximum: float
    default: float
    on_change: Callable[[float], None] = field(default=_ignore, repr=False, compare=False)
    value: float = field(init=False)

    def __post_init__(self) -> None:
        self.value = self._coerce(self.default)

    def _coerce(self, value: Any) -> float:
        return min(max(float(value), self.minimum), self.maximum)


@dataclass
class IntParameter:
    """A whole-number parameter, rounded and clamped to ``[minimum, maximum]``."""

    id: str
    name: str
    minimum: int
    maximum: int
    default: int
    on_change: Callable[[int], None] = field(default=_ignore, repr=False, compare=False)
    value: int = field(init=False)

    def __post_init__(self) -> None:
        self.value = self._coerce(self.default)

    def _coerce(self, value: Any) -> int:
        rounded = int(math.floor(float(value) + 0.5))
        return min(max(rounded, self.minimum), self.maximum)


@dataclass
class BoolParameter:
    """An on/off parameter."""

    id: str
    name: str
    default: bool
    on_change: Callable[[bool], None] = field(default=_ignore, repr=False, compare=False)
    value: bool = field(init=False)

    def __post_init__(self) -> None:
        self.value = self._coerce(self.default)

    @staticmethod
    def _coerce(value: Any) -> bool:
        return bool(value)


Parameter = Union[FloatParameter, IntParameter, BoolParameter]


class OgunProcessor(CurveListener):
    """Owns one :class:`OgunNote` and the parameters that steer it."""

    NAME = "ogun"
    ACCEPTS_MIDI = True
    PRODUCES_MIDI = False
    IS_MIDI_EFFECT = False
    TAIL_LENGTH_SECONDS = 0.0
    NUM_PROGRAMS = 1

    def __init__(self) -> None:
        self._note = OgunNote()
        note = self._note

        def set_harmonic_num(fft_n: int) -> None:
            note.set_harmonic_num(fft_n)
            note.mark_bins_changed()

        def set_phase_seed(seed: int) -> None:
            note.set_phase_seed(seed)
            note.mark_bins_changed()

        def set_saw_slope(saw: bool) -> None:
            note.set_use_saw_slope(saw)
            note.mark_bins_changed()

        params: list[Parameter] = [
            FloatParameter(FREQ, "freq", 50.0, 500.0, 110.0, note.set_frequency),
            IntParameter(
                HARMONIC_NUM,
                "harmonic_num",
                OgunNote.MIN_HARMONIC_NUM,
                OgunNote.MAX_HARMONIC_NUM,
                OgunNote.DEFAULT_HARMONIC_NUM,
                set_harmonic_num,
            ),
            IntParameter(PHASE_SEED, "phase_seed", 0, 100, 0, set_phase_seed),
            BoolParameter(SAW_SLOPE, "saw_slope", True, set_saw_slope),
            BoolParameter(PHASE_MOVE_MUL_FREQ, "pm_mulfreq", True, note.set_phase_move_mul_freq),
            FloatParameter(VOLUME, "volume", -20.0, 40.0, 0.0, note.set_volume),
            FloatParameter(PHASE_MOVE, "phase_move", 0.0, 5000.0, 0.0, note.set_phase_move),
        ]
        self._parameters: dict[str, Parameter] = {p.id: p for p in params}

        note.timbre_amp.add_listener(self)
        note.timbre_formant.add_listener(self)

    @property
    def note(self) -> OgunNote:
        return self._note

    @property
    def parameter_ids(self) -> tuple[str, ...]:
        return tuple(self._parameters)

    def parameter(self, param_id: str) -> Parameter:
        """Return the parameter registered under ``param_id``."""
        try:
            return self._parameters[param_id]
        except KeyError:
            raise KeyError(f"unknown parameter: {param_id!r}") from None

    def set_parameter(self, param_id: str, value: Any) -> None:
        """Store ``value`` (clamped to the parameter's range) and apply it to the voice."""
        param = self.parameter(param_id)
        param.value = param._coerce(value)
        param.on_change(param.value)

    def prepare_to_play(self, sample_rate: float, samples_per_block: int) -> None:
        """Set the voice up for ``sample_rate`` and push every parameter to it."""
        self._note.init(float(sample_rate))
        for param in self._parameters.values():
            param.on_change(param.value)

    def process_block(self, left: np.ndarray, right: np.ndarray) -> None:
        """Render into ``left`` and copy the result into ``right``."""
        if len(left) != len(right):
            raise ValueError(
                f"channel lengths differ: {len(left)} left, {len(right)} right"
            )
        self._note.process(left)
        right[:] = left

    def on_curve_changed(self, curve: Curve, *args: Any) -> None:
        """A timbre curve was edited: the wavetable must be rebuilt."""
        self._note.mark_bins_changed()

    def on_add_point(self, curve: Curve, point: Point, before_idx: int) -> None:
        self.on_curve_changed(curve, point, before_idx)

    def on_remove_point(self, curve: Curve, remove_idx: int) -> None:
        self.on_curve_changed(curve, remove_idx)

    def on_point_xy_changed(self, curve: Curve, changed_idx: int) -> None:
        self.on_curve_changed(curve, changed_idx)

    def on_point_power_changed(self, curve: Curve, changed_idx: int) -> None:
        self.on_curve_changed(curve, changed_idx)

    def on_reload(self, curve: Curve) -> None:
        self.on_curve_changed(curve)