"""Command-line runner that paces the weather simulation and logs each sample."""
import argparse
import logging
import os
import signal
import sys
import time
from datetime import date
from typing import Callable, Optional, Tuple, Union

from dotenv import load_dotenv

from weather_observer import InvalidConfiguration, LoggingObserver
from weather_simulator import WeatherSimulationEngine

DEFAULT_START_DATE = "2025-06-01"
DEFAULT_INTERVAL_MINUTES = 60


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Synthetic weather stream")
    parser.add_argument("--start-date", default=None, help="First simulated day (YYYY-MM-DD)")
    parser.add_argument("--interval", type=int, default=None, help="Simulated minutes per step")
    parser.add_argument("--steps", type=non_negative_int, default=0, help="Number of steps (0 = until interrupted)")
    parser.add_argument("--refresh", type=float, default=2.0, help="Seconds between steps")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--isolate-errors", action="store_true", help="Keep notifying when a subscriber fails")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def load_config(args: argparse.Namespace) -> Tuple[str, int, Optional[int]]:
    """
    Resolve start date, interval and seed from flags, then environment, then defaults.

    Only numeric parsing happens here; the engine validates the values.
    """
    load_dotenv()
    start_raw = args.start_date or os.getenv("WEATHER_START_DATE", DEFAULT_START_DATE)
    interval_raw = args.interval if args.interval is not None else os.getenv("WEATHER_INTERVAL_MINUTES")
    seed_raw = args.seed if args.seed is not None else os.getenv("WEATHER_SEED")

    try:
        interval = int(interval_raw) if interval_raw is not None else DEFAULT_INTERVAL_MINUTES
        seed = int(seed_raw) if seed_raw is not None else None
    except ValueError as exc:
        raise SystemExit(f"Invalid numeric setting: {exc}") from exc

    logging.info("Configuration loaded: start=%s interval=%smin seed=%s", start_raw, interval, seed)
    return start_raw, interval, seed


def build_engine(start_date: Union[date, str], interval: int, seed: Optional[int], isolate_errors: bool) -> WeatherSimulationEngine:
    try:
        engine = WeatherSimulationEngine(
            start_date,
            interval,
            seed=seed,
            isolate_subscriber_errors=isolate_errors,
        )
    except InvalidConfiguration as err:
        raise SystemExit(f"Invalid configuration: {err}") from err
    engine.subscribe(LoggingObserver())
    return engine


def simulation_loop(
    engine: WeatherSimulationEngine,
    steps: int,
    refresh: float,
    sleep: Callable[[float], None] = time.sleep
) -> int:
    """
    Step the engine on a fixed real-time cadence.

    Args:
        engine: Engine to drive
        steps: Number of steps to run, 0 for no limit
        refresh: Seconds to wait between steps
        sleep: Sleep function (injected in tests)

    Returns:
        Number of steps performed
    """
    count = 0
    while steps == 0 or count < steps:
        engine.step()
        count += 1
        if count == steps:
            break
        sleep(max(refresh, 0.0))
    return count


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    start_date, interval, seed = load_config(args)
    engine = build_engine(start_date, interval, seed, args.isolate_errors)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        simulation_loop(engine, args.steps, args.refresh)
    except KeyboardInterrupt:
        logging.info("Stopping simulation")
    finally:
        logging.info("Simulation ended at %s", engine.last_timestamp.isoformat())


if __name__ == "__main__":
    main()
