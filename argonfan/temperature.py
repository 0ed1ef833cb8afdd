#!/usr/bin/env python3
"""
CPU temperature readings
"""

import logging

from attrs import frozen

from argonfan.conversions import convert_celsius2fahrenheit, convert_millidegrees2celsius
from argonfan.errors import SensorUnavailable
from argonfan.options import TemperatureUnit

LH = logging.getLogger('argonfan')

THERMAL_ZONE = '/sys/class/thermal/thermal_zone0/temp'


@frozen
class TemperatureSample:
    value: float
    unit:  TemperatureUnit

    def __str__(self) -> str:
        return f"{self.value:.1f}{self.unit.symbol}"


class CpuTemperatureSource:

    def __init__(self, unit: TemperatureUnit, path: str = THERMAL_ZONE):
        self._unit = unit
        self._path = path

    def read(self) -> TemperatureSample:
        """
        read the current CPU temperature in the configured unit
         - raises SensorUnavailable if the thermal zone can't be read
        """
        try:
            with open(self._path, 'r') as fh:
                raw = fh.read().strip()
        except OSError as e:
            raise SensorUnavailable(f"Unable to read '{self._path}': {e}") from e
        try:
            millidegrees = int(raw)
        except ValueError as e:
            raise SensorUnavailable(f"Unexpected reading '{raw}' in '{self._path}'.") from e
        celsius = convert_millidegrees2celsius(millidegrees)
        LH.debug("thermal zone: %i -> %.1f°C", millidegrees, celsius)
        if self._unit == TemperatureUnit.CELSIUS:
            return TemperatureSample(value=celsius, unit=self._unit)
        else:
            return TemperatureSample(value=convert_celsius2fahrenheit(celsius), unit=self._unit)
