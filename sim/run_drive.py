# sim/run_drive.py
#!/usr/bin/env python3
import argparse, csv, logging, os

from env.world import World
from plan.bezier_planner import REVERSAL_ANGULAR, REVERSAL_POLICIES, PlannerConfig
from plan.behaviors import CRUISE_SPEED
from sim.simulation import SimConfig, Simulation

TRACE_HEADER = ['tick', 't', 'x', 'y', 'heading', 'speed',
                'target_x', 'target_y', 'target_heading', 'turn', 'avoiding', 'arrived']


def build_simulation(seed=0, policy=REVERSAL_ANGULAR, cruise_speed=CRUISE_SPEED):
    if policy == REVERSAL_ANGULAR:
        planner = PlannerConfig()
        world = World(seed=seed)
    else:
        # earlier variant: adaptive handle, gated reversal, fully random headings
        planner = PlannerConfig.legacy()
        world = World(seed=seed, uniform_heading=True)
    return Simulation(world, SimConfig(planner=planner, cruise_speed=cruise_speed))


def run(sim, ticks, dt, trace_path=None, keep_snapshots=False, snap_every=1):
    """Step the simulation a fixed number of ticks. Returns the snapshots kept (maybe empty)."""
    snaps = []
    writer = None
    f = None
    if trace_path is not None:
        f = open(trace_path, 'w', newline='')
        writer = csv.writer(f)
        writer.writerow(TRACE_HEADER)
    try:
        for k in range(ticks):
            if keep_snapshots and k % snap_every == 0:
                snaps.append(sim.snapshot())
            res = sim.step(dt)
            if writer is not None:
                v, tgt = sim.vehicle, sim.target
                writer.writerow([k, f"{sim.time:.4f}", f"{v.position[0]:.3f}", f"{v.position[1]:.3f}",
                                 f"{v.heading:.5f}", f"{v.speed:.4f}",
                                 f"{tgt.position[0]:.3f}", f"{tgt.position[1]:.3f}", f"{tgt.heading:.5f}",
                                 f"{res.turn_rate:.5f}", int(res.avoid_turn is not None), int(res.arrived)])
    finally:
        if f is not None:
            f.close()
    return snaps


def main(argv=None):
    ap = argparse.ArgumentParser(description="Run the tracktor steering demo headless.")
    ap.add_argument('--ticks', type=int, default=3600)
    ap.add_argument('--dt', type=float, default=1.0 / 60.0)
    ap.add_argument('--seed', type=int, default=0)
    ap.add_argument('--policy', choices=REVERSAL_POLICIES, default=REVERSAL_ANGULAR)
    ap.add_argument('--cruise-speed', type=float, default=CRUISE_SPEED)
    ap.add_argument('--outdir', type=str, default='results')
    ap.add_argument('--gif', type=str, default=None, help='optional GIF output path')
    ap.add_argument('--stride', type=int, default=5, help='keep every k-th tick for the GIF')
    ap.add_argument('--log-level', default='WARNING')
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    if args.ticks < 0 or args.dt < 0:
        ap.error('--ticks and --dt must be non-negative')

    os.makedirs(args.outdir, exist_ok=True)
    sim = build_simulation(args.seed, args.policy, args.cruise_speed)
    snaps = run(sim, args.ticks, args.dt,
                trace_path=os.path.join(args.outdir, 'trace.csv'),
                keep_snapshots=args.gif is not None, snap_every=max(1, args.stride))

    # summary.csv
    v = sim.vehicle
    with open(os.path.join(args.outdir, 'summary.csv'), 'w', newline='') as f:
        w = csv.writer(f)
        w.writerow(['seed', 'policy', 'ticks', 'sim_time_s', 'arrivals', 'final_x', 'final_y', 'final_speed'])
        w.writerow([args.seed, args.policy, sim.ticks, f"{sim.time:.3f}", sim.arrivals,
                    f"{v.position[0]:.3f}", f"{v.position[1]:.3f}", f"{v.speed:.3f}"])

    if args.gif:
        from sim.animate import save_gif_frames  # matplotlib only when drawing
        gif_dir = os.path.dirname(args.gif)
        if gif_dir:
            os.makedirs(gif_dir, exist_ok=True)
        n = save_gif_frames(snaps, out=args.gif)
        print(f"wrote {n} frames to {args.gif}")

    print(f"{sim.ticks} ticks, {sim.time:.1f}s simulated, {sim.arrivals} targets reached")


if __name__ == '__main__':
    main()
