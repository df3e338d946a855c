# geom/angles.py
import math

TWO_PI = 2.0 * math.pi


def normalize_angle(a):
    """Wrap an angle into (-pi, pi]. Exact at the boundary: pi stays pi, -pi becomes pi."""
    a = math.fmod(a, TWO_PI)  # (-2pi, 2pi), exact for any finite input
    if a > math.pi:
        a -= TWO_PI
    elif a <= -math.pi:
        a += TWO_PI
    return a


def angle_diff(a, b):
    """
    Shortest signed difference a - b, in (-pi, pi].
    Python's % is floored, so the raw result lands in [-pi, pi); the
    correction moves -pi (and anything below it from rounding) to the top.
    """
    d = (a - b + math.pi) % TWO_PI - math.pi
    if d <= -math.pi:
        d += TWO_PI
    return d


def clamp(v, lo, hi):
    return max(lo, min(hi, v))
