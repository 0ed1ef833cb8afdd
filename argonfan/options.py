#!/usr/bin/env python3
"""
add-on options

Home Assistant hands the add-on's configuration over as a JSON document
(usually '/data/options.json'). Every value is optional and anything that
can't be used is replaced by its default. The controller must start even
if the options are garbage.
"""

import json
import logging
import math
from enum import Enum

from attrs import field, frozen

from argonfan.errors import ConfigInvalid

LH = logging.getLogger('argonfan')

OPTIONS_FILE = '/data/options.json'

DEFAULT_MIN_TEMP = 55.0
DEFAULT_MAX_TEMP = 85.0


class TemperatureUnit(Enum):
    CELSIUS    = 'C'
    FAHRENHEIT = 'F'

    @property
    def symbol(self) -> str:
        return f"°{self.value}"


class BackendMode(Enum):
    AUTO      = 'Auto'  # probe I²C, fall back to PWM
    FORCE_I2C = 'I2C'   # only use the Argon MCU
    FORCE_PWM = 'PWM'   # only use the native PWM interface


@frozen
class Options:
    """
    parsed add-on options

    The temperature thresholds are expressed in the configured unit.
    """
    min_temp:          float = DEFAULT_MIN_TEMP
    max_temp:          float = DEFAULT_MAX_TEMP
    unit:              TemperatureUnit = TemperatureUnit.FAHRENHEIT
    reporting_enabled: bool = False
    backend_mode:      BackendMode = BackendMode.AUTO
    bus_override:      tuple[int, ...] | None = field(default=None)

    def __attrs_post_init__(self):
        # frozen class: bypass the setattr guard to normalize the range
        if self.min_temp > self.max_temp:
            LH.warning("Minimum temperature %.1f exceeds maximum temperature %.1f. Swapping.", self.min_temp, self.max_temp)
            min_temp, max_temp = self.max_temp, self.min_temp
            object.__setattr__(self, 'min_temp', min_temp)
            object.__setattr__(self, 'max_temp', max_temp)


def load_options(path: str = OPTIONS_FILE) -> Options:
    """
    read the options file and return the parsed options
     - a missing or unreadable file results in the default options
    """
    try:
        with open(path, 'r') as fh:
            document = json.load(fh)
    except OSError as e:
        LH.warning("Unable to read options file '%s': %s Using defaults.", path, e)
        return Options()
    except ValueError as e:
        LH.warning("Unable to parse options file '%s': %s Using defaults.", path, e)
        return Options()
    if not isinstance(document, dict):
        LH.warning("Options file '%s' does not contain a mapping. Using defaults.", path)
        return Options()
    return parse_options(document)


def parse_options(document: dict) -> Options:
    """
    convert the raw option values into an Options object
    """
    min_temp          = _parse_option(document, 'Minimum Temperature', _parse_temperature, DEFAULT_MIN_TEMP)
    max_temp          = _parse_option(document, 'Maximum Temperature', _parse_temperature, DEFAULT_MAX_TEMP)
    unit              = _parse_option(document, 'Temperature Unit', _parse_unit, TemperatureUnit.FAHRENHEIT)
    reporting_enabled = document.get('Create Entity') is True
    backend_mode      = _parse_option(document, 'Backend', _parse_backend_mode, BackendMode.AUTO)
    bus_override      = _parse_option(document, 'I2C Bus Override', _parse_bus_override, None)
    options = Options(
        min_temp=min_temp,
        max_temp=max_temp,
        unit=unit,
        reporting_enabled=reporting_enabled,
        backend_mode=backend_mode,
        bus_override=bus_override,
    )
    LH.debug("options: %s", options)
    return options


def _parse_option(document: dict, key: str, parser, default):
    value = document.get(key)
    if value is None or value == '':
        return default
    try:
        return parser(value)
    except ConfigInvalid as e:
        LH.warning("Ignoring option '%s': %s Using default value '%s'.", key, e, default)
        return default


def _parse_temperature(value) -> float:
    # bool is a subclass of int and must not be mistaken for a number
    if isinstance(value, bool):
        raise ConfigInvalid(f"'{value}' is not a number.")
    try:
        temperature = float(value)
    except (TypeError, ValueError):
        raise ConfigInvalid(f"'{value}' is not a number.")
    if not math.isfinite(temperature):
        raise ConfigInvalid(f"'{value}' is not a finite number.")
    return temperature


def _parse_unit(value) -> TemperatureUnit:
    # anything but 'C' means Fahrenheit
    if value == 'C':
        return TemperatureUnit.CELSIUS
    else:
        return TemperatureUnit.FAHRENHEIT


def _parse_backend_mode(value) -> BackendMode:
    for mode in BackendMode:
        if str(value).lower() == mode.value.lower():
            return mode
    raise ConfigInvalid(f"'{value}' is not one of 'Auto', 'I2C' or 'PWM'.")


def _parse_bus_override(value) -> tuple[int, ...] | None:
    if isinstance(value, list):
        values = value
    else:
        values = [value]
    buses = []
    for bus in values:
        if isinstance(bus, bool):
            raise ConfigInvalid(f"'{bus}' is not a bus number.")
        try:
            bus_nr = int(bus)
        except (TypeError, ValueError):
            raise ConfigInvalid(f"'{bus}' is not a bus number.")
        if bus_nr < 0:
            raise ConfigInvalid(f"'{bus}' is not a bus number.")
        buses.append(bus_nr)
    if buses:
        return tuple(buses)
    else:
        return None
