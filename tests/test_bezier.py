import numpy as np
import pytest

from geom.bezier import bezier_point, bezier_point3, sample_curve

P = [(-300.0, -300.0), (-300.0, -100.0), (150.0, 700.0), (400.0, 400.0)]


def test_endpoints_exact():
    assert bezier_point(*P, 0.0) == P[0]
    assert bezier_point(*P, 1.0) == P[3]
    assert bezier_point3(P[0], P[1], P[3], 0.0) == P[0]
    assert bezier_point3(P[0], P[1], P[3], 1.0) == P[3]


def test_straight_line_midpoint():
    line = [(0.0, 0.0), (0.0, 1.0), (0.0, 2.0), (0.0, 3.0)]
    assert bezier_point(*line, 0.5) == pytest.approx((0.0, 1.5))


def test_sample_curve_matches_point_eval():
    curve = sample_curve(P, n=100)
    assert curve.shape == (101, 2)
    for i in (0, 13, 50, 87, 100):
        assert curve[i] == pytest.approx(bezier_point(*P, i / 100.0))


def test_sample_curve_quadratic():
    q = P[:3]
    curve = sample_curve(q, n=10)
    assert curve.shape == (11, 2)
    assert curve[4] == pytest.approx(bezier_point3(*q, 0.4))


def test_sample_curve_rejects_bad_input():
    with pytest.raises(ValueError):
        sample_curve([(0, 0), (1, 1)])
    with pytest.raises(ValueError):
        sample_curve(P, n=0)
