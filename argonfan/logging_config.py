#!/usr/bin/env python3
"""
console logging for the daemon
"""

import logging

import colorama
import coloredlogs

LOG_FORMAT = '%(asctime)s %(levelname).1s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(verbose: bool = False):
    """
    install a colored console handler on the root logger
     - '-v' enables debug output
    """
    if verbose:
        verbosity = 'DEBUG'
    else:
        verbosity = 'INFO'
    colorama.init()
    coloredlogs.install(level=verbosity, fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    # libraries are chatty on debug level
    logging.getLogger('urllib3').setLevel(logging.WARNING)
