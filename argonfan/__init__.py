#!/usr/bin/env python3
"""
temperature controlled fan speed for the Argon ONE case (Raspberry Pi)

The fan is driven either by the case's microcontroller (I²C) or by the
Raspberry Pi 5's native PWM fan header. The backend is selected once at
startup and the controller falls back to PWM if the microcontroller stops
responding.
"""

# typical usage scenarios
# =======================

# run the controller
# -> pick a backend, then poll the CPU temperature forever
# -------------------------------------------------------------------------
# from argonfan import Actuator, BackendSelector, ControlLoop, CpuTemperatureSource, load_options
#
# options = load_options('/data/options.json')
# actuator = Actuator(state=BackendSelector(options=options).select())
# source = CpuTemperatureSource(unit=options.unit)
# ControlLoop(source=source, actuator=actuator, options=options).run()
# -------------------------------------------------------------------------

# set a fixed fan speed
# -------------------------------------------------------------------------
# from argonfan import ArgonMcu, open_i2c_bus
#
# ArgonMcu(i2c_bus=open_i2c_bus(1)).set_dutycycle(50)
# -------------------------------------------------------------------------

# the following imports are provided for user convenience
# flake8: noqa: F401
from argonfan.actuator import I2C_FAIL_THRESHOLD, Actuator, ActuatorState
from argonfan.backends import ArgonMcu, FanBackend, SysfsPwm, open_i2c_bus
from argonfan.control import POLL_INTERVAL, ControlLoop
from argonfan.conversions import convert_celsius2fahrenheit, convert_dutycycle2pwm, convert_fahrenheit2celsius, convert_temperature2dutycycle
from argonfan.errors import ArgonFanError, ConfigInvalid, NoHardwareFound, ProbeFailed, ReportingFailed, SensorUnavailable, WriteFailed
from argonfan.options import BackendMode, Options, TemperatureUnit, load_options
from argonfan.reporting import HomeAssistantReporter, ReportEvent
from argonfan.selection import DENSE_THRESHOLD, BackendKind, BackendSelector, BackendState
from argonfan.temperature import CpuTemperatureSource, TemperatureSample
