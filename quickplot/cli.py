from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import numpy as np

from quickplot.api import plot
from quickplot.colors import BLUE, CYAN, GREEN, PURPLE, RED, RGBA, YELLOW
from quickplot.config import PlotConfig, config_from_env, load_config
from quickplot.session import BuildFn, PlotSession
from quickplot.targets.base import RenderTarget
from quickplot.targets.headless import HeadlessTarget


LOGGER = logging.getLogger(__name__)

CSV_PALETTE: tuple[RGBA, ...] = (RED, GREEN, BLUE, YELLOW, CYAN, PURPLE)
DEFAULT_HEADLESS_FRAMES = 1


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="quickplot")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Plot a small built-in example.")
    _add_run_options(demo)

    csv = sub.add_parser("csv", help="Plot numeric columns of a CSV file.")
    csv.add_argument("path", type=Path)
    csv.add_argument(
        "--columns",
        type=int,
        nargs="+",
        default=None,
        help="Zero-based columns to plot as y series. Default: every column.",
    )
    csv.add_argument("--x-column", type=int, default=None, help="Column used as x for every series.")
    csv.add_argument("--delimiter", default=",")
    csv.add_argument("--skip-rows", type=int, default=0, help="Header rows to skip.")
    _add_run_options(csv)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = _resolve_config(args)

    if args.command == "demo":
        build = demo_build
    elif args.command == "csv":
        build = csv_build(
            args.path,
            columns=args.columns,
            x_column=args.x_column,
            delimiter=args.delimiter,
            skip_rows=args.skip_rows,
        )
    else:
        raise RuntimeError(f"unsupported command: {args.command}")

    target = _build_target(args, config)
    max_frames = args.frames
    if max_frames is None and args.render == "headless":
        max_frames = DEFAULT_HEADLESS_FRAMES
    result = plot(build, config=config, target=target, max_frames=max_frames)
    if args.snapshot is not None:
        if not isinstance(target, HeadlessTarget):
            raise RuntimeError("--snapshot requires --render headless")
        target.save_snapshot(args.snapshot)
        LOGGER.info("saved snapshot to %s", args.snapshot)
    print(
        f"plot complete: frames={result.frames_rendered} presented={result.frames_presented} "
        f"stopped_by_close_key={result.stopped_by_close_key} "
        f"stopped_by_target_close={result.stopped_by_target_close}"
    )


def demo_build(session: PlotSession) -> None:
    session.new().x([-0.5, -0.1, 2.0]).y([-1, 1, -1]).rgb(255, 0, 255)
    session.new().y([10, -10, 10, -10]).rgb(255, 0, 0)


def csv_build(
    path: Path,
    *,
    columns: Sequence[int] | None = None,
    x_column: int | None = None,
    delimiter: str = ",",
    skip_rows: int = 0,
) -> BuildFn:
    """Load `path` once and return a build callback plotting its columns."""
    data = np.loadtxt(path, delimiter=delimiter, skiprows=skip_rows, ndmin=2, dtype=np.float64)
    ncols = data.shape[1]
    selected = list(range(ncols)) if columns is None else list(columns)
    if x_column is not None:
        _check_column(x_column, ncols)
        if columns is None:
            selected = [c for c in selected if c != x_column]
    for col in selected:
        _check_column(col, ncols)
    LOGGER.info("loaded %d rows x %d columns from %s", data.shape[0], ncols, path)

    def build(session: PlotSession) -> None:
        for i, col in enumerate(selected):
            builder = session.new().y(data[:, col]).color(CSV_PALETTE[i % len(CSV_PALETTE)])
            if x_column is not None:
                builder.x(data[:, x_column])

    return build


def _check_column(col: int, ncols: int) -> None:
    if col < 0 or col >= ncols:
        raise ValueError(f"column {col} out of range for {ncols} columns")


def _add_run_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--render", choices=["tk", "headless"], default="tk")
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Max frames. Default: run until closed for tk render; 1 for headless render.",
    )
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--title", default=None)
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [plot] table.")
    parser.add_argument("--snapshot", type=Path, default=None, help="Save the last headless frame as PNG.")
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"], default="warning")


def _resolve_config(args: argparse.Namespace) -> PlotConfig:
    config = PlotConfig()
    if args.config is not None:
        config = load_config(args.config, base=config)
    config = config_from_env(config)
    return config.with_overrides(fps=args.fps, width=args.width, height=args.height, title=args.title)


def _build_target(args: argparse.Namespace, config: PlotConfig) -> RenderTarget | None:
    if args.render == "headless":
        return HeadlessTarget(width=config.width, height=config.height)
    return None
