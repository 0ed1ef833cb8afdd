#!/usr/bin/env python3
"""
temperature controlled fan speed for the Argon ONE case

usage:
  - argon-fan-control
  - argon-fan-control -v --options /data/options.json
"""

import argparse
import logging
import signal
import sys

from argonfan.actuator import Actuator
from argonfan.control import ControlLoop
from argonfan.errors import NoHardwareFound
from argonfan.logging_config import setup_logging
from argonfan.options import OPTIONS_FILE, load_options
from argonfan.reporting import HomeAssistantReporter
from argonfan.selection import BackendSelector
from argonfan.temperature import CpuTemperatureSource

LH = logging.getLogger('argonfan')


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog='argon-fan-control', description='temperature controlled fan speed for the Argon ONE case')
    parser.add_argument('-o', '--options', type=str, default=OPTIONS_FILE, help=f"add-on options file (default: {OPTIONS_FILE})")
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    options = load_options(args.options)
    LH.info("Settings initialized.")

    try:
        backend_state = BackendSelector(options=options).select()
    except NoHardwareFound as e:
        LH.error("%s Unable to control the fan.", e)
        return 1

    actuator = Actuator(state=backend_state)
    source = CpuTemperatureSource(unit=options.unit)
    reporter = HomeAssistantReporter() if options.reporting_enabled else None
    loop = ControlLoop(source=source, actuator=actuator, options=options, reporter=reporter)

    def handle_signal(signum, frame):
        LH.info("Received signal %i. Shutting down.", signum)
        loop.stop()

    signal.signal(signal.SIGTERM, handle_signal)
    signal.signal(signal.SIGINT, handle_signal)

    try:
        loop.run()
    finally:
        if reporter is not None:
            reporter.shutdown()
    return 0


if __name__ == '__main__':
    sys.exit(main())
