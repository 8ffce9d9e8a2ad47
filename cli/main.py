"""Command-line entry points for viewing, running, and plotting simulations."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Allow `python cli/main.py ...` execution from IDEs by adding repo root to sys.path.
if __package__ in {None, ""}:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from configs.loader import DEFAULT_CONFIG_PATH, ConfigLoader
from main import run_headless
from visualization.plotting import plot_run


def run_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="forager")
    sub = parser.add_subparsers(dest="command", required=False)

    gui_cmd = sub.add_parser("gui")
    gui_cmd.add_argument("--config", default=str(DEFAULT_CONFIG_PATH))

    run_cmd = sub.add_parser("run")
    run_cmd.add_argument("--config", default=str(DEFAULT_CONFIG_PATH))
    run_cmd.add_argument("--generations", type=int, default=10)
    run_cmd.add_argument("--db", default="simulation_scores.db")

    plot_cmd = sub.add_parser("plot")
    plot_cmd.add_argument("--run", required=True)
    plot_cmd.add_argument("--db", default="simulation_scores.db")
    plot_cmd.add_argument("--out", default="artifacts/scores.png")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    if args.command is None or args.command == "gui":
        from gui.app import main as gui_main

        config_path = getattr(args, "config", str(DEFAULT_CONFIG_PATH))
        return int(gui_main(["--config", config_path]))

    if args.command == "run":
        config = ConfigLoader.load(args.config)
        run_id = run_headless(config, args.generations, Path(args.db))
        print(run_id)
        return 0

    if args.command == "plot":
        path = plot_run(args.db, args.run, args.out)
        print(path)
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(run_cli())
