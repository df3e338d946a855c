# geom/bezier.py
import numpy as np

DEFAULT_CURVE_SAMPLES = 100


def bezier_point(p0, p1, p2, p3, t):
    """
    Cubic Bezier point at parameter t.
    t is not clamped here; callers keep it in [0, 1].
    """
    u = 1.0 - t
    uu = u * u
    tt = t * t
    a = uu * u
    b = 3.0 * uu * t
    c = 3.0 * u * tt
    d = tt * t
    return (a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0],
            a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1])


def bezier_point3(p0, p1, p2, t):
    """Quadratic Bezier point at parameter t."""
    u = 1.0 - t
    a = u * u
    b = 2.0 * u * t
    c = t * t
    return (a * p0[0] + b * p1[0] + c * p2[0],
            a * p0[1] + b * p1[1] + c * p2[1])


def sample_curve(control_points, n=DEFAULT_CURVE_SAMPLES):
    """
    Return an (n+1, 2) array of curve points for t = 0, 1/n, ..., 1.
    Accepts 3 (quadratic) or 4 (cubic) control points.
    """
    pts = np.asarray(control_points, dtype=float)
    if pts.shape not in ((3, 2), (4, 2)):
        raise ValueError(f"expected 3 or 4 2D control points, got shape {pts.shape}")
    if n < 1:
        raise ValueError("n must be >= 1")

    t = np.linspace(0.0, 1.0, n + 1)[:, None]
    u = 1.0 - t
    if len(pts) == 3:
        return u**2 * pts[0] + 2.0 * u * t * pts[1] + t**2 * pts[2]
    return (u**3 * pts[0] + 3.0 * u**2 * t * pts[1]
            + 3.0 * u * t**2 * pts[2] + t**3 * pts[3])
