# sim/animate.py
import numpy as np
import matplotlib
matplotlib.use("Agg")  # off-screen backend for image/GIF writing
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Polygon as MplPoly
import imageio.v2 as imageio

from env.world import ARENA_HALF_SIZE
from geom.polygons import vehicle_footprint
from geom.vectors import add, heading_vector
from vehicles.tractor import TRACKTOR_LENGTH, TRACKTOR_WIDTH

ARROW_LENGTH = 50.0
VIEW_MARGIN = 100.0


def _arrow(ax, start, heading, color):
    end = add(start, heading_vector(ARROW_LENGTH, heading))
    ax.annotate("", xy=end, xytext=start,
                arrowprops=dict(arrowstyle="->", color=color, linewidth=2))


def draw_scene(ax, snap, trail=None):
    """Draw obstacles, target, vehicle, and the current curve of one snapshot."""
    ax.clear()
    ax.set_aspect('equal', adjustable='box')
    lim = ARENA_HALF_SIZE + VIEW_MARGIN
    ax.set_xlim(-lim, lim)
    ax.set_ylim(-lim, lim)
    ax.grid(True, linewidth=0.5, color="#dddddd")

    # obstacles (filled)
    for ob in snap.obstacles:
        ax.add_patch(Circle(ob.position, ob.radius, fill=True, alpha=0.25, color="purple"))

    # path so far
    if trail is not None and len(trail) > 1:
        xs, ys = zip(*trail)
        ax.plot(xs, ys, linewidth=1, color="gray")

    # target + arrival heading
    ax.plot(*snap.target.position, marker='o', markersize=6, color="red")
    _arrow(ax, snap.target.position, snap.target.heading, "red")

    # control polygon, curve and look-ahead point
    if snap.plan is not None:
        cp = np.asarray(snap.plan.control_points)
        ax.plot(cp[:, 0], cp[:, 1], linewidth=1, color="black", linestyle=":")
        ax.plot(cp[1:3, 0], cp[1:3, 1], linestyle="none", marker='o', markersize=4, color="gold")
        ax.plot(snap.curve[:, 0], snap.curve[:, 1], linewidth=2, color="green")
        ax.plot(*snap.look_ahead, marker='o', markersize=5, color="red")

    # vehicle footprint + heading
    v = snap.vehicle
    vpoly = vehicle_footprint(v.position, v.heading, TRACKTOR_LENGTH, TRACKTOR_WIDTH)
    ax.add_patch(MplPoly(vpoly, closed=True, fill=True, color="blue"))
    _arrow(ax, v.position, v.heading, "blue")

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(f"tracktor speed {v.speed:.2f}")


def save_png(snap, out_path, trail=None):
    """Save a single snapshot as PNG."""
    fig, ax = plt.subplots(figsize=(6, 6))
    draw_scene(ax, snap, trail)
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)


def save_gif_frames(snaps, out="drive.gif", stride=1, *, frame_delay=0.10):
    """
    Save an animated GIF from a list of snapshots.

    Args:
        snaps: list of sim.simulation.Snapshot, one per tick.
        out (str): output GIF filename.
        stride (int | float): draw every k-th snapshot (float is rounded).
        frame_delay (float): frame duration in seconds.
    """
    stride_int = max(1, int(round(stride)))

    imgs = []
    trail = []
    for k, snap in enumerate(snaps):
        trail.append(snap.vehicle.position)
        if k % stride_int:
            continue
        fig, ax = plt.subplots(figsize=(6, 6))
        draw_scene(ax, snap, trail)

        # rasterize
        fig.canvas.draw()
        w, h = fig.canvas.get_width_height()
        buf = np.frombuffer(fig.canvas.buffer_rgba(), dtype=np.uint8)
        rgba = buf.reshape(h, w, 4)
        imgs.append(rgba[..., :3].copy())
        plt.close(fig)

    if not imgs:
        raise ValueError("no frames to write")
    imageio.mimsave(out, imgs, duration=float(frame_delay))
    return len(imgs)
