#!/usr/bin/env python3
"""
exceptions raised by the fan controller

Only NoHardwareFound is expected to escape to the caller. Everything else
is handled where it happens and merely logged.
"""


class ArgonFanError(Exception):
    """
    base class for all errors raised by this package
    """


class ConfigInvalid(ArgonFanError, ValueError):
    """
    an option has an unusable value (replaced by its default)
    """


class SensorUnavailable(ArgonFanError):
    """
    the CPU temperature could not be read
    """


class ProbeFailed(ArgonFanError):
    """
    a single I²C bus could not be opened or scanned
    """


class NoHardwareFound(ArgonFanError):
    """
    neither an I²C controller nor a PWM interface is available
    """


class WriteFailed(ArgonFanError):
    """
    a single attempt to set the fan speed did not succeed
    """


class ReportingFailed(ArgonFanError):
    """
    the fan speed could not be published to Home Assistant
    """
