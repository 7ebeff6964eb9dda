################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Command line entry point for evaluating media timing conversions.
"""

import argparse
import logging
import sys
from typing import Optional

from oasis_timing.config.timing_params import TimingParams
from oasis_timing.config.timing_persistence import TimingPersistenceError
from oasis_timing.config.timing_persistence import load_yaml_config
from oasis_timing.config.timing_yaml import TimingConfigYaml
from oasis_timing.timing.basic_time import RepeatParams
from oasis_timing.timing.basic_time import active_to_basic
from oasis_timing.timing.media_timing import parent_to_local
from oasis_timing.timing.media_timing import solve_begin_time


_LOG: logging.Logger = logging.getLogger(__name__)


################################################################################
# Argument parsing
################################################################################


def _add_timing_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--begin-time",
        type=float,
        default=None,
        help="Begin time in the parent timespace, in seconds",
    )
    parser.add_argument(
        "--time-offset",
        type=float,
        default=None,
        help="Offset applied in the local timespace, in seconds",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Rate of local time relative to parent time",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file with timing parameters; flags override its values",
    )


def _parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="oasis_timing", description="Evaluate media timing conversions"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    local_parser = commands.add_parser(
        "local", help="Convert a parent time into local time"
    )
    local_parser.add_argument("parent_time", type=float)
    _add_timing_args(local_parser)

    basic_parser = commands.add_parser(
        "basic", help="Convert a parent time into basic local time"
    )
    basic_parser.add_argument("parent_time", type=float)
    _add_timing_args(basic_parser)
    basic_parser.add_argument(
        "--duration", type=float, default=None, help="Iteration duration"
    )
    basic_parser.add_argument(
        "--repeat-count", type=float, default=None, help="Number of iterations"
    )
    basic_parser.add_argument(
        "--autoreverses",
        action="store_true",
        help="Play each iteration forward then backward",
    )

    begin_parser = commands.add_parser(
        "begin", help="Solve the begin time mapping parent time onto local time"
    )
    begin_parser.add_argument("parent_time", type=float)
    begin_parser.add_argument("local_time", type=float)
    begin_parser.add_argument("--time-offset", type=float, default=0.0)
    begin_parser.add_argument("--speed", type=float, default=1.0)

    return parser.parse_args(args=args)


################################################################################
# Commands
################################################################################


def _load_config(options: argparse.Namespace) -> Optional[TimingConfigYaml]:
    if options.config is None:
        return None
    config: TimingConfigYaml = load_yaml_config(options.config)
    _LOG.debug("Loaded timing config from %s", options.config)
    return config


def _timing_params(
    options: argparse.Namespace, config: Optional[TimingConfigYaml]
) -> TimingParams:
    params: TimingParams = config.timing if config is not None else TimingParams()
    overrides: dict[str, float] = {}
    if options.begin_time is not None:
        overrides["begin_time"] = options.begin_time
    if options.time_offset is not None:
        overrides["time_offset"] = options.time_offset
    if options.speed is not None:
        overrides["speed"] = options.speed
    return params.replace(**overrides)


def _repeat_params(
    options: argparse.Namespace, config: Optional[TimingConfigYaml]
) -> RepeatParams:
    base: Optional[RepeatParams] = config.repeat if config is not None else None
    duration: Optional[float] = options.duration
    if duration is None and base is not None:
        duration = base.duration
    if duration is None:
        raise ValueError("duration is required for basic local time")
    repeat_count: Optional[float] = options.repeat_count
    if repeat_count is None:
        repeat_count = base.repeat_count if base is not None else 1.0
    autoreverses: bool = options.autoreverses or (
        base.autoreverses if base is not None else False
    )
    return RepeatParams(
        duration=duration, repeat_count=repeat_count, autoreverses=autoreverses
    )


def _run(options: argparse.Namespace) -> float:
    if options.command == "begin":
        return solve_begin_time(
            options.parent_time,
            options.local_time,
            options.time_offset,
            options.speed,
        )

    config: Optional[TimingConfigYaml] = _load_config(options)
    params: TimingParams = _timing_params(options, config)
    _LOG.debug("Using timing parameters %s", params.as_dict())
    local_time: float = float(parent_to_local(options.parent_time, params))
    if options.command == "local":
        return local_time

    repeat: RepeatParams = _repeat_params(options, config)
    return float(active_to_basic(local_time, repeat))


################################################################################
# Entry point
################################################################################


def main(args: Optional[list[str]] = None) -> None:
    options = _parse_args(args=args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result: float = _run(options)
    except (ValueError, TimingPersistenceError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(result)


if __name__ == "__main__":
    main()
