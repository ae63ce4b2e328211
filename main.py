#!/usr/bin/env python3
"""
Command line entry point.

    python main.py --run
    python main.py --report <UUID>
"""

import argparse
import logging
import sys

from integration_runner import IntegrationRunner
from runner_config import load_settings

logger = logging.getLogger(__name__)

USAGE = "main.py [--run | --report <UUID>]"


def build_parser():
    parser = argparse.ArgumentParser(usage=USAGE, description="Dimension integration runner")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--run", action="store_true", help="Run a new integration")
    mode.add_argument("--report", metavar="UUID", help="Report on an existing integration run")
    return parser


def main(argv=None, runner=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.run and not args.report:
        parser.print_usage()
        print("No valid options provided. Use --run to start a new integration "
              "or --report <UUID> to report on an existing run.")
        return 1

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    runner = runner or IntegrationRunner(settings)
    try:
        if args.run:
            runner.run_integration_and_report()
        else:
            runner.run_report_on_existing_integration(args.report)
    except KeyboardInterrupt:
        logger.warning("Interrupted; browser session closed.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
