import pytest

from ogun.curve import (
    Curve,
    CurveInit,
    CurveListener,
    Point,
    PowerType,
    power_type_name,
    power_y_value,
)


class Recorder(CurveListener):
    def __init__(self):
        self.events = []

    def on_add_point(self, curve, point, before_idx):
        self.events.append(("add", point, before_idx))

    def on_remove_point(self, curve, remove_idx):
        self.events.append(("remove", remove_idx))

    def on_point_xy_changed(self, curve, changed_idx):
        self.events.append(("xy", changed_idx))

    def on_point_power_changed(self, curve, changed_idx):
        self.events.append(("power", changed_idx))

    def on_reload(self, curve):
        self.events.append(("reload",))


def test_null_curve_is_all_zero():
    curve = Curve(16, CurveInit.NULL)
    assert len(curve.data) == 18
    assert all(v == 0.0 for v in curve.data)


def test_full_curve_is_all_one():
    curve = Curve(16, CurveInit.FULL)
    assert all(v == 1.0 for v in curve.data)


def test_default_size():
    curve = Curve()
    assert curve.max_line_resolution == 1024
    assert curve.line_resolution == 1024


def test_invalid_size_raises():
    with pytest.raises(ValueError):
        Curve(0)


def test_ramp_is_linear_and_tail_repeats():
    curve = Curve(8, CurveInit.RAMP)
    for i in range(8):
        assert curve.get(i) == pytest.approx(i / 8)
    assert curve.get(8) == curve.get(7)
    assert curve.get(9) == curve.get(8)


def test_power_y_value_shapes():
    assert power_y_value(0.3, PowerType.KEEP, 0.5) == 0.0
    assert power_y_value(0.3, PowerType.EXP, 0.0) == 0.3
    assert power_y_value(0.0, PowerType.EXP, 0.5) == pytest.approx(0.0)
    assert power_y_value(0.0, PowerType.WAVE_SINE, 0.2) == pytest.approx(0.0)
    assert power_y_value(0.0, PowerType.WAVE_TRI, 0.2) == pytest.approx(0.0)
    assert power_y_value(0.25, PowerType.WAVE_SQUARE, -1.0) == 0.0
    assert power_y_value(0.75, PowerType.WAVE_SQUARE, -1.0) == 1.0


def test_power_y_value_exp_is_monotonic():
    for power in (-1.0, -0.3, 0.4, 1.0):
        values = [power_y_value(i / 20, PowerType.EXP, power) for i in range(20)]
        assert values == sorted(values)
        assert all(0.0 <= v <= 1.0 for v in values)


def test_power_y_value_unknown_type_raises():
    with pytest.raises(ValueError):
        power_y_value(0.5, 99, 0.0)


def test_power_type_names():
    assert power_type_name(PowerType.KEEP) == "keep"
    assert power_type_name(PowerType.EXP) == "exp"
    assert power_type_name(PowerType.WAVE_SQUARE) == "wave_square"
    with pytest.raises(ValueError):
        power_type_name(42)


def test_add_point_keeps_order_and_notifies():
    curve = Curve(8)
    rec = Recorder()
    curve.add_listener(rec)
    p = Point(0.5, 1.0)
    curve.add_point(p)
    assert [pt.x for pt in curve.points] == [0.0, 0.5, 1.0]
    assert rec.events == [("add", p, 0)]
    assert curve.get(4) == 1.0
    assert curve.get(0) == 0.0

    q = Point(0.75, 0.5)
    curve.add_point(q)
    assert [pt.x for pt in curve.points] == [0.0, 0.5, 0.75, 1.0]
    assert rec.events[-1] == ("add", q, 1)


def test_remove_keeps_ends():
    curve = Curve(8)
    rec = Recorder()
    curve.add_listener(rec)
    curve.remove(0)
    curve.remove(1)
    assert curve.num_points == 2
    assert rec.events == []

    curve.add_point(Point(0.5, 1.0))
    curve.remove(1)
    assert curve.num_points == 2
    assert rec.events[-1] == ("remove", 1)
    assert all(v == 0.0 for v in curve.data)


def test_remove_out_of_range_raises():
    curve = Curve(8)
    with pytest.raises(IndexError):
        curve.remove(5)


def test_set_xy_pins_ends_and_clamps():
    curve = Curve(8, CurveInit.RAMP)
    rec = Recorder()
    curve.add_listener(rec)
    curve.set_xy(0, 0.4, 2.0)
    assert curve.point(0) == Point(0.0, 1.0)
    assert rec.events == [("xy", 0)]
    assert all(curve.get(i) == 1.0 for i in range(8))


def test_set_xy_middle_clamped_between_neighbours():
    curve = Curve(8)
    curve.add_point(Point(0.5, 0.5))
    curve.add_point(Point(0.75, 0.5))
    curve.set_xy(1, 0.9, -1.0)
    pt = curve.point(1)
    assert pt.x == 0.75
    assert pt.y == 0.0


def test_set_xy_unchanged_does_not_notify():
    curve = Curve(8, CurveInit.RAMP)
    rec = Recorder()
    curve.add_listener(rec)
    curve.set_xy(1, 1.0, 1.0)
    curve.set_xy(7, 0.5, 0.5)
    assert rec.events == []


def test_set_power_clamps_and_notifies_once():
    curve = Curve(8, CurveInit.RAMP)
    rec = Recorder()
    curve.add_listener(rec)
    curve.set_power(0, 3.0)
    assert curve.point(0).power == 1.0
    curve.set_power(0, 1.0)
    curve.set_power(1, 0.5)
    assert rec.events == [("power", 0)]


def test_set_power_type_keep_holds_start_value():
    curve = Curve(8, CurveInit.RAMP)
    rec = Recorder()
    curve.add_listener(rec)
    curve.set_power_type(0, PowerType.KEEP)
    assert curve.point(0).power_type is PowerType.KEEP
    assert all(v == 0.0 for v in curve.data)
    assert rec.events == [("power", 0)]


def test_set_line_resolution_rerenders():
    curve = Curve(8, CurveInit.RAMP)
    curve.set_line_resolution(4)
    assert curve.line_resolution == 4
    for i in range(4):
        assert curve.get(i) == pytest.approx(i / 4)
    assert curve.get(4) == curve.get(3)
    with pytest.raises(ValueError):
        curve.set_line_resolution(9)
    with pytest.raises(ValueError):
        curve.set_line_resolution(0)


def test_float_get_interpolates():
    curve = Curve(8, CurveInit.RAMP)
    assert curve.get(2.5) == pytest.approx((curve.get(2) + curve.get(3)) / 2)
    assert curve.get(3.0) == curve.get(3)
    assert curve.get_normalized(0.5) == curve.get(4)
    assert curve.get_normalized(1.0) == curve.get(8)


def test_init_reloads_and_notifies():
    curve = Curve(8)
    rec = Recorder()
    curve.add_listener(rec)
    curve.add_point(Point(0.5, 1.0))
    curve.init(CurveInit.FULL)
    assert curve.points == (Point(0.0, 1.0), Point(1.0, 1.0))
    assert rec.events[-1] == ("reload",)
    assert all(v == 1.0 for v in curve.data)


def test_listener_added_once_and_removable():
    curve = Curve(8)
    rec = Recorder()
    curve.add_listener(rec)
    curve.add_listener(rec)
    curve.init(CurveInit.RAMP)
    assert rec.events == [("reload",)]
    curve.remove_listener(rec)
    curve.init(CurveInit.NULL)
    assert rec.events == [("reload",)]


def test_default_listener_hooks_accept_calls():
    curve = Curve(8)
    base = CurveListener()
    curve.add_listener(base)
    curve.add_point(Point(0.5, 0.5))
    assert curve.num_points == 3
    assert curve.get(4) == 0.5