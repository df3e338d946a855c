# geom/vectors.py
# 2D points are plain (x, y) tuples. Heading 0 points up (+y) and grows
# counter-clockwise, so a heading h faces the direction (-sin h, cos h).
import math


def add(a, b):
    return (a[0] + b[0], a[1] + b[1])


def sub(a, b):
    return (a[0] - b[0], a[1] - b[1])


def scale(a, k):
    return (a[0] * k, a[1] * k)


def distance(a, b):
    return math.hypot(b[0] - a[0], b[1] - a[1])


def unit(a):
    n = math.hypot(a[0], a[1])
    if n == 0.0:
        return (0.0, 0.0)
    return (a[0] / n, a[1] / n)


def heading_vector(length, heading):
    """(0, length) rotated by heading."""
    return (-length * math.sin(heading), length * math.cos(heading))


def bearing(a, b):
    """Standard atan2 angle of b - a (0 along +x)."""
    return math.atan2(b[1] - a[1], b[0] - a[0])


def heading_to(a, b):
    """Heading (0 = up convention) that faces from a toward b. Not normalized."""
    return bearing(a, b) - math.pi / 2.0
