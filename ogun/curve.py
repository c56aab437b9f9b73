"""Breakpoint curves rendered into a lookup table.

A curve is a list of points sorted by ``x`` in ``[0, 1]``. Each point also
carries a shape (``power_type`` and ``power``) that controls how the
segment from it to the next point is drawn. The rendered table has
``line_resolution + 2`` usable entries so that interpolated reads just past
the end stay in range.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, replace

from .listeners import ListenerList

LINE_RESOLUTION = 1024

_POWER_TYPE_NAMES = ("keep", "exp", "wave_sine", "wave_tri", "wave_square")


class CurveInit(enum.Enum):
    """Starting shapes for a curve."""

    RAMP = enum.auto()
    NULL = enum.auto()
    FULL = enum.auto()


class PowerType(enum.IntEnum):
    """How a segment is shaped between its two points."""

    KEEP = 0
    EXP = 1
    WAVE_SINE = 2
    WAVE_TRI = 3
    WAVE_SQUARE = 4


@dataclass(frozen=True)
class Point:
    """A breakpoint and the shape of the segment that starts at it."""

    x: float
    y: float
    power: float = 0.0
    power_type: PowerType = PowerType.EXP


class CurveListener:
    """Receives change notifications from a :class:`Curve`.

    Every hook does nothing by default; override the ones of interest.
    """

    def on_add_point(self, curve: Curve, point: Point, before_idx: int) -> None:
        """A point was inserted right after index ``before_idx``."""

    def on_remove_point(self, curve: Curve, remove_idx: int) -> None:
        """The point at ``remove_idx`` was removed."""

    def on_point_xy_changed(self, curve: Curve, changed_idx: int) -> None:
        """The position of the point at ``changed_idx`` changed."""

    def on_point_power_changed(self, curve: Curve, changed_idx: int) -> None:
        """The segment shape of the point at ``changed_idx`` changed."""

    def on_reload(self, curve: Curve) -> None:
        """All points were replaced."""


def _round(value: float) -> float:
    """Round half away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _lerp(a: float, b: float, t: float) -> float:
    if t == 1.0:
        return b
    return a + t * (b - a)


def _cycles(power: float, max_cycles: float) -> float:
    return _round((power * 0.5 + 0.5) * max_cycles)


def power_y_value(nor_x: float, power_type: PowerType, power: float) -> float:
    """Map ``nor_x`` in ``[0, 1)`` through a segment shape to a blend factor."""
    if power_type == PowerType.KEEP:
        return 0.0
    if power_type == PowerType.EXP:
        mapped_exp_base = power * 20
        if abs(mapped_exp_base) <= 1e-3:
            return nor_x
        down = math.exp(mapped_exp_base) - 1.0
        up = math.exp(mapped_exp_base * nor_x) - 1.0
        return up / down
    if power_type == PowerType.WAVE_SINE:
        cycles = _cycles(power, 64.0) + 0.5
        return -math.cos(cycles * nor_x * math.pi * 2.0) * 0.5 + 0.5
    if power_type == PowerType.WAVE_TRI:
        cycles = _cycles(power, 64.0) + 0.5
        phase = math.modf(nor_x * cycles)[0]
        return 1.0 - abs(1.0 - 2.0 * phase)
    if power_type == PowerType.WAVE_SQUARE:
        cycles = _cycles(power, 63.0) + 1.0
        phase = math.modf(nor_x * cycles)[0]
        return 0.0 if phase < 0.5 else 1.0
    raise ValueError(f"unknown power type: {power_type!r}")


def power_type_name(power_type: PowerType) -> str:
    """Return the short name of ``power_type``."""
    try:
        return _POWER_TYPE_NAMES[PowerType(power_type)]
    except ValueError:
        raise ValueError(f"unknown power type: {power_type!r}") from None


class Curve:
    """Editable breakpoint curve with a rendered lookup table."""

    def __init__(self, size: int = LINE_RESOLUTION, init: CurveInit = CurveInit.NULL) -> None:
        if size < 1:
            raise ValueError(f"curve size must be at least 1, got {size}")
        self._max_line_resolution = size
        self._line_resolution = size
        self._points: list[Point] = []
        self._data = [0.0] * (size + 2)
        self._listeners = ListenerList()
        self.init(init)

    @property
    def max_line_resolution(self) -> int:
        return self._max_line_resolution

    @property
    def line_resolution(self) -> int:
        return self._line_resolution

    @property
    def data(self) -> tuple[float, ...]:
        """The whole rendered table."""
        return tuple(self._data)

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(self._points)

    @property
    def num_points(self) -> int:
        return len(self._points)

    def init(self, init: CurveInit) -> None:
        """Replace all points with one of the starting shapes."""
        if init == CurveInit.RAMP:
            points = [Point(0.0, 0.0), Point(1.0, 1.0)]
        elif init == CurveInit.NULL:
            points = [Point(0.0, 0.0), Point(1.0, 0.0)]
        elif init == CurveInit.FULL:
            points = [Point(0.0, 1.0), Point(1.0, 1.0)]
        else:
            raise ValueError(f"unknown curve init: {init!r}")
        self._points = points
        self.full_render()
        self._listeners.call("on_reload", self)

    def set_line_resolution(self, resolution: int) -> None:
        """Render into the first ``resolution`` table entries."""
        if not 1 <= resolution <= self._max_line_resolution:
            raise ValueError(
                f"resolution must be in 1..{self._max_line_resolution}, got {resolution}"
            )
        self._line_resolution = resolution
        self.full_render()

    def _check_index(self, idx: int) -> None:
        if idx < 0:
            raise IndexError(f"point index out of range: {idx}")

    def remove(self, idx: int) -> None:
        """Remove an inner point; the first and last points are kept."""
        self._check_index(idx)
        if idx >= len(self._points):
            raise IndexError(f"point index out of range: {idx}")
        if idx == 0 or idx == len(self._points) - 1:
            return
        del self._points[idx]
        self.part_render(idx - 1, idx + 1)
        self._listeners.call("on_remove_point", self, idx)

    def add_point(self, point: Point) -> None:
        """Insert ``point`` into the segment whose span contains its ``x``."""
        for i, (curr, nxt) in enumerate(zip(self._points, self._points[1:])):
            if curr.x <= point.x <= nxt.x:
                self.add_behind(i, point)
                return
        self.add_behind(len(self._points) - 1, point)

    def add_behind(self, idx: int, point: Point) -> None:
        """Insert ``point`` right after the point at ``idx``."""
        self._check_index(idx)
        self._points.insert(idx + 1, point)
        self.part_render(idx, idx + 2)
        self._listeners.call("on_add_point", self, point, idx)

    def get(self, idx: int | float) -> float:
        """Read the table; a float index interpolates between neighbours."""
        if isinstance(idx, int):
            return self._data[idx]
        before = int(idx)
        frac = idx - before
        return _lerp(self._data[before], self._data[before + 1], frac)

    def get_normalized(self, nor: float) -> float:
        """Read the table at a position in ``[0, 1]``."""
        return self.get(float(self._line_resolution * nor))

    def point(self, idx: int) -> Point:
        self._check_index(idx)
        return self._points[idx]

    def set_xy(self, idx: int, new_x: float, new_y: float) -> None:
        """Move a point, keeping the end points at x 0 and 1 and the order intact."""
        self._check_index(idx)
        count = len(self._points)
        if idx >= count:
            return
        if idx == 0:
            new_x = 0.0
        elif idx == count - 1:
            new_x = 1.0
        else:
            new_x = min(max(new_x, self._points[idx - 1].x), self._points[idx + 1].x)
        new_y = min(max(new_y, 0.0), 1.0)

        old = self._points[idx]
        if old.x != new_x or old.y != new_y:
            self._points[idx] = replace(old, x=new_x, y=new_y)
            self.part_render(idx - 1, idx + 1)
            self._listeners.call("on_point_xy_changed", self, idx)

    def set_power(self, idx: int, new_power: float) -> None:
        """Set the shape amount of the segment starting at ``idx``, clamped to [-1, 1]."""
        self._check_index(idx)
        if idx >= len(self._points) - 1:
            return
        new_power = min(max(new_power, -1.0), 1.0)
        old = self._points[idx]
        if old.power != new_power:
            self._points[idx] = replace(old, power=new_power)
            self.part_render(idx, idx + 1)
            self._listeners.call("on_point_power_changed", self, idx)

    def set_power_type(self, idx: int, new_type: PowerType) -> None:
        """Set the shape kind of the segment starting at ``idx``."""
        self._check_index(idx)
        if idx >= len(self._points) - 1:
            return
        new_type = PowerType(new_type)
        old = self._points[idx]
        if old.power_type != new_type:
            self._points[idx] = replace(old, power_type=new_type)
            self.part_render(idx, idx + 1)
            self._listeners.call("on_point_power_changed", self, idx)

    def part_render(self, begin_point_idx: int, end_point_idx: int) -> None:
        """Redraw the segments that start at points in the given index range."""
        count = len(self._points)
        begin_point_idx = max(0, begin_point_idx)
        end_point_idx = min(end_point_idx, count)
        resolution = self._line_resolution
        for curr, nxt in zip(
            self._points[begin_point_idx:end_point_idx],
            self._points[begin_point_idx + 1 : end_point_idx + 1],
        ):
            begin_idx = int(_round(curr.x * resolution))
            end_idx = int(_round(nxt.x * resolution))
            if begin_idx == end_idx:
                continue
            x_range = end_idx - begin_idx
            inv_range = 1.0 / x_range
            for x in range(x_range):
                map_x = power_y_value(x * inv_range, curr.power_type, curr.power)
                self._data[begin_idx + x] = _lerp(curr.y, nxt.y, map_x)
        self._data[resolution] = self._data[resolution - 1]
        self._data[resolution + 1] = self._data[resolution]

    def full_render(self) -> None:
        """Redraw every segment."""
        self.part_render(0, len(self._points))

    def add_listener(self, listener: CurveListener) -> None:
        self._listeners.add(listener)

    def remove_listener(self, listener: CurveListener) -> None:
        self._listeners.remove(listener)