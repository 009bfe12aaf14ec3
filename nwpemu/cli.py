"""Command line entry point of the emulator."""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from .provider import DataSourceType, NWPDataProvider
from .reader import EmulatorError

log = logging.getLogger(__name__)

USAGE = "nwpemu [--grib-src=<path> | --config-src=<path>] [OPTION]... [--help]"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the emulator command."""
    parser = argparse.ArgumentParser(
        prog="nwpemu",
        description="NWP model emulator to facilitate plugins development",
    )
    parser.add_argument("--grib-src", metavar="PATH", help="Path to GRIB files source")
    parser.add_argument("--config-src", metavar="PATH", help="Path to emulator config file")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the random generator")
    return parser


def main(argv=None) -> int:
    """Run the emulator over every step of its data source."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if (args.grib_src is None) == (args.config_src is None):
        print(f"Usage : {USAGE}", file=sys.stderr)
        return 1
    if args.grib_src is not None:
        source_type, path = DataSourceType.GRIB, args.grib_src
    else:
        source_type, path = DataSourceType.CONFIG, args.config_src

    try:
        provider = NWPDataProvider(source_type, path, rng=np.random.default_rng(args.seed))
        while provider.get_step_data():
            log.info("Step %d complete", provider.step)
    except EmulatorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("Process 0 finished...")
    print("Emulator run completed...")
    return 0


if __name__ == "__main__":
    sys.exit(main())