# run_all.py
import subprocess
import sys


def run_sim(ticks=3600, dt=1.0 / 60.0, outdir="results", seed=0, policy="angular", gif=None):
    cmd = [
        sys.executable, "-m", "sim.run_drive",
        "--ticks", str(ticks),
        "--dt", str(dt),
        "--outdir", outdir,
        "--seed", str(seed),
        "--policy", policy,
    ]
    if gif:
        cmd += ["--gif", gif]
    subprocess.run(cmd, check=True)


def make_plot(outdir="results"):
    subprocess.run([
        sys.executable, "-m", "utils.metrics",
        f"{outdir}/trace.csv",
        "--out", f"{outdir}/trace.png"
    ], check=True)


if __name__ == "__main__":
    run_sim(gif="media/drive.gif")
    make_plot()
