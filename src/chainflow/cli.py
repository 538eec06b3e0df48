"""Command-line interface for chainflow.

Usage::

    chainflow run samples.txt --preset standard --threads 4 --output-dir out
    chainflow env
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .config.settings import Settings
from .config.validate import check_environment, print_environment_info
from .pipeline import build_estimators, feed_samples


def _setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure root logger to log to stderr and optionally a log file.

    Args:
        verbose: If ``True`` set console log level to ``DEBUG`` else ``INFO``.
        log_file: Optional path to a log file, always written at ``DEBUG``.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers: List[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(log_format))
    handlers.append(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    logging.debug("Logging initialised. Log file: %s", log_file)


def _load_settings(args: argparse.Namespace) -> Settings:
    if args.config is not None:
        settings = Settings.from_toml(args.config)
    else:
        settings = Settings.from_preset(args.preset)

    overrides = {}
    if args.threads is not None:
        overrides["n_threads"] = args.threads
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    return settings.update(**overrides) if overrides else settings


def _load_samples(path: Path) -> np.ndarray:
    """Load one sample per row from a whitespace-separated text file."""
    if not path.exists():
        raise FileNotFoundError(f"Samples file not found: {path}")
    return np.loadtxt(path, ndmin=2)


# -----------------------------------------------------------------------------
# Sub-command implementations
# -----------------------------------------------------------------------------

def _cmd_run(args: argparse.Namespace) -> int:
    """Entry point for the ``run`` sub-command."""
    logger = logging.getLogger(__name__)
    logger.info("Starting run – samples: %s", args.samples)

    try:
        settings = _load_settings(args)
        samples = _load_samples(Path(args.samples))
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Failed to load input: %s", exc)
        return 1

    if not 0 <= settings.histogram_component < samples.shape[1]:
        logger.error("Histogram component %d out of range for %d-dimensional samples",
                     settings.histogram_component, samples.shape[1])
        return 1

    try:
        estimators = build_estimators(settings, dim=samples.shape[1])
    except (TypeError, ValueError) as exc:
        logger.error("Invalid estimator configuration: %s", exc)
        return 1

    try:
        histogram = estimators["histogram"]
        n = feed_samples([estimators["mean"], estimators["autocovariance"]],
                         samples, n_threads=settings.n_threads)
        feed_samples([histogram], samples[:, settings.histogram_component],
                     n_threads=settings.n_threads)

        output_dir = Path(settings.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        histogram_path = output_dir / "histogram.txt"
        histogram.write_gnuplot(histogram_path)
        logger.info("Wrote histogram to %s", histogram_path)

        summary = {
            "n_samples": n,
            "mean": np.atleast_1d(estimators["mean"].get()).tolist(),
            "autocovariance": estimators["autocovariance"].get().tolist(),
            "histogram": [count for _, _, count in histogram.get()],
        }
        print(json.dumps(summary, indent=2))
        logger.info("Run finished – %d samples", n)
        return 0
    except Exception as exc:  # noqa: BLE001
        logger.exception("Run failed: %s", exc)
        return 2


def _cmd_env(args: argparse.Namespace) -> int:
    """Entry point for the ``env`` sub-command."""
    logger = logging.getLogger(__name__)
    print_environment_info()

    try:
        check_environment()
    except RuntimeError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Environment validation completed successfully")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chainflow",
        description="Online statistics for streams of MCMC samples",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Also log to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_p = subparsers.add_parser("run", help="Feed a samples file through the estimators")
    run_p.add_argument("samples", help="Whitespace-separated text file, one sample per row")
    source = run_p.add_mutually_exclusive_group()
    source.add_argument("--config", type=Path, default=None, help="TOML settings file")
    source.add_argument("--preset", default="standard", help="Settings preset name")
    run_p.add_argument("--threads", type=int, default=None, help="Number of feeder threads")
    run_p.add_argument("--output-dir", default=None, help="Directory for histogram.txt")
    run_p.set_defaults(func=_cmd_run)

    env_p = subparsers.add_parser("env", help="Print environment information")
    env_p.set_defaults(func=_cmd_env)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.log_file)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
