#!/usr/bin/env python3
"""
the poll loop

read temperature -> compute duty cycle -> set fan speed -> report -> sleep
"""

import logging
import threading

from argonfan.actuator import Actuator
from argonfan.conversions import convert_temperature2dutycycle
from argonfan.errors import SensorUnavailable
from argonfan.options import Options
from argonfan.reporting import HomeAssistantReporter, ReportEvent
from argonfan.temperature import CpuTemperatureSource

LH = logging.getLogger('argonfan')

# seconds between two temperature readings
POLL_INTERVAL = 30.0


class ControlLoop:

    def __init__(self, source: CpuTemperatureSource, actuator: Actuator, options: Options, reporter: HomeAssistantReporter | None = None, interval: float = POLL_INTERVAL):
        self._source = source
        self._actuator = actuator
        self._options = options
        self._reporter = reporter
        self._interval = interval
        self._stop_event = threading.Event()

    def run_once(self) -> int | None:
        """
        perform a single control cycle and return the applied duty cycle
         - returns 'None' if the temperature could not be read
        """
        try:
            sample = self._source.read()
        except SensorUnavailable as e:
            LH.warning("Skipping cycle: %s", e)
            return None
        LH.debug("Current temperature = %s", sample)
        dutycycle = convert_temperature2dutycycle(sample.value, self._options.min_temp, self._options.max_temp)
        LH.info("Temp %s - Fan %i%% (backend=%s)", sample, dutycycle, self._actuator.describe())
        self._actuator.write(dutycycle)
        if self._reporter is not None:
            # fire and forget
            self._reporter.report(ReportEvent(duty=dutycycle, temperature=sample.value, unit=sample.unit))
        return dutycycle

    def run(self):
        """
        run until stop() is called
        """
        LH.info("Beginning monitor (%.1f%s..%.1f%s, every %is).", self._options.min_temp, self._options.unit.symbol, self._options.max_temp, self._options.unit.symbol, self._interval)
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception:
                # a single bad cycle must not take down the controller
                LH.exception("Unexpected error during control cycle.")
            self._stop_event.wait(self._interval)
        LH.info("Monitor stopped.")

    def stop(self):
        self._stop_event.set()
