import argparse
import random
import time

from timestats import Profiler
from utils.arg_tools import load_config, merge_cli
from utils.config import load_env_config
from utils.logger import Logger
from utils.seeding import set_global_seeds


def parse_args(argv=None):
    """
    CLI for profiling a synthetic nested workload.
    Additional flags are parsed from YAML and can be overridden via CLI.
    """
    p = argparse.ArgumentParser("Profile a synthetic workload and print the timing report.")
    p.add_argument("--config", type=str, default=None,
                   help="Optional YAML file with overrides")
    p.add_argument("--configs_dir", type=str, default="configs",
                   help="Directory holding base.yaml")
    p.add_argument("--run_name", type=str, default=None,
                   help="Optional run name for the CSV export")
    p.add_argument("--seed", type=int, default=1,
                   help="RNG seed for the sleep jitter")

    # workload
    p.add_argument("--steps", type=int, default=3,
                   help="Checkpoints recorded per scope")
    p.add_argument("--depth", type=int, default=2,
                   help="Nesting depth of the workload scopes")
    p.add_argument("--sleep", type=float, default=0.02,
                   help="Mean sleep per checkpoint, in seconds")

    # output
    p.add_argument("--save_csv", action="store_true", default=False,
                   help="Write report rows to <runs_root>/<run_name>/report.csv")
    p.add_argument("--no_color", action="store_true", default=False,
                   help="Render the table without ANSI colors")

    cli, unknown_cli = p.parse_known_args(argv)
    cfg = load_config(cli.config, cli.configs_dir)  # load from YAML
    args = merge_cli(cfg, cli, unknown_cli, argv)   # override from CLI

    return args


def run_workload(ts: Profiler, depth: int, steps: int, sleep: float):
    """Nested scopes with jittered checkpoints, `depth` levels deep."""
    label = f"level_{depth}"
    with ts.track(label, comment=f"{steps} steps"):
        for step in range(steps):
            time.sleep(max(0.0, random.gauss(sleep, sleep / 4)))
            ts.profile(f"step {step}")
        if depth > 1:
            run_workload(ts, depth - 1, steps, sleep)


def main(argv=None):
    args = parse_args(argv)
    env_cfg = load_env_config()

    set_global_seeds(args.seed)

    ts = Profiler(enable=getattr(args, "enable", True) and env_cfg["enable"],
                  color_schema=getattr(args, "color_schema", None))
    logger = Logger(run_name=args.run_name,
                    runs_root=env_cfg["runs_root"],
                    save_csv=args.save_csv,
                    config=vars(args))

    ts.profile("start")
    try:
        run_workload(ts, args.depth, args.steps, args.sleep)
        ts.profile("done")
        color = getattr(args, "color", True) and not args.no_color
        logger.log_report(ts, width=getattr(args, "table_width", None), color=color)
    finally:
        logger.close()

    return ts


if __name__ == "__main__":
    main()
