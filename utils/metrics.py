# utils/metrics.py
#!/usr/bin/env python3
import argparse, csv
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Circle

from env.world import DEFAULT_OBSTACLES


def load_trace(csv_path):
    """Read a run_drive trace into column lists of floats."""
    cols = {}
    with open(csv_path, newline='') as f:
        r = csv.DictReader(f)
        for row in r:
            for k, val in row.items():
                cols.setdefault(k, []).append(float(val))
    return cols


def plot_trace(cols, out, obstacles=DEFAULT_OBSTACLES):
    fig, (ax_path, ax_speed) = plt.subplots(1, 2, figsize=(12, 6))

    ax_path.set_aspect('equal', adjustable='box')
    for ob in obstacles:
        ax_path.add_patch(Circle(ob.position, ob.radius, alpha=0.25, color="purple"))
    ax_path.plot(cols.get('x', []), cols.get('y', []), linewidth=1.5, label='vehicle')
    # one marker per distinct target
    targets = sorted(set(zip(cols.get('target_x', []), cols.get('target_y', []))))
    if targets:
        tx, ty = zip(*targets)
        ax_path.plot(tx, ty, linestyle='none', marker='x', color='red', label='targets')
    ax_path.set_xlabel('x')
    ax_path.set_ylabel('y')
    ax_path.legend(loc='upper right')
    ax_path.set_title('Driven path')

    ax_speed.plot(cols.get('t', []), cols.get('speed', []), label='speed')
    ax_speed.plot(cols.get('t', []), cols.get('turn', []), label='turn', alpha=0.6)
    ax_speed.set_xlabel('time (s)')
    ax_speed.legend()
    ax_speed.set_title('Speed and turn command')

    fig.tight_layout()
    fig.savefig(out)
    plt.close(fig)


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument('csv_path')
    ap.add_argument('--out', default='results/trace.png')
    args = ap.parse_args(argv)

    cols = load_trace(args.csv_path)
    plot_trace(cols, args.out)
    print(f"{len(cols.get('tick', []))} ticks plotted to {args.out}")


if __name__ == '__main__':
    main()
