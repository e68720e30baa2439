"""Command-line entry point: ``tremorsense demo`` and ``tremorsense record``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from .config import TremorConfig, load_config
from .core.errors import StartError
from .core.models import AnalysisResult, PlotPoint
from .core.session import SessionController
from .sensors import SyntheticMotionSource, stdin_source

logger = logging.getLogger(__name__)


def _print_result(result: Optional[AnalysisResult], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.as_dict() if result else None))
        return
    if result is None:
        print("No samples recorded; nothing to analyse.")
        return
    freq = "n/a" if result.dominant_frequency_hz is None else f"{result.dominant_frequency_hz} Hz"
    amp = "n/a" if result.average_amplitude is None else f"{result.average_amplitude} m/s²"
    print(f"Dominant frequency: {freq}")
    print(f"Average amplitude:  {amp}")
    print(f"Data points:        {result.sample_count}")
    print(f"Classification:     {result.classification.value}")


def _maybe_plot(enabled: bool, series: list[PlotPoint], result: Optional[AnalysisResult]) -> None:
    if not enabled:
        return
    from .tools.plotter import plot_result

    plot_result(series, result)


def _run_demo(args: argparse.Namespace, cfg: TremorConfig) -> int:
    controller = SessionController(config=cfg, rng=np.random.default_rng(args.seed))
    result = controller.generate_test_data(args.count, args.target_hz, args.noise)
    _print_result(result, as_json=args.json)
    _maybe_plot(args.plot, controller.plot_series(), result)
    return 0


def _run_record(args: argparse.Namespace, cfg: TremorConfig) -> int:
    if args.source == "synthetic":
        source = SyntheticMotionSource(cfg, rng=np.random.default_rng(args.seed))
    else:
        source = stdin_source()

    with SessionController(source, cfg) as controller:
        try:
            controller.start()
        except StartError as exc:
            print(f"Cannot start recording: {exc}", file=sys.stderr)
            return 2

        print(f"Recording... ({cfg.auto_stop_seconds:g} seconds max, Ctrl+C to stop)", file=sys.stderr)
        try:
            while not controller.wait_idle(0.2):
                pass
        except KeyboardInterrupt:
            logger.info("Interrupted; stopping recording")
        result = controller.stop()
        _print_result(result, as_json=args.json)
        _maybe_plot(args.plot, controller.plot_series(), result)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tremorsense",
        description="Estimate tremor frequency from triaxial acceleration samples.",
    )
    parser.add_argument("-c", "--config", type=str, help="YAML file overriding TremorConfig defaults.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--json", action="store_true", help="Print the result as a JSON object.")
    parser.add_argument("--plot", action="store_true", help="Show the magnitude trace (needs Matplotlib).")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the noise generator.")

    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Analyse synthetic test data.")
    demo.add_argument("-n", "--count", type=int, default=None, help="Number of samples (default: 100).")
    demo.add_argument("-f", "--target-hz", type=float, default=None, help="Tremor frequency (default: 5.0).")
    demo.add_argument("--noise", type=float, default=None, help="Peak-to-peak noise (default: 0.5).")

    record = sub.add_parser("record", help="Record a live session and analyse it.")
    record.add_argument(
        "-s",
        "--source",
        choices=["stdin", "synthetic"],
        default="stdin",
        help="Sample source: JSON lines on stdin (default) or the built-in simulation.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        cfg = load_config(args.config)
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "demo":
        return _run_demo(args, cfg)
    return _run_record(args, cfg)


if __name__ == "__main__":
    raise SystemExit(main())
