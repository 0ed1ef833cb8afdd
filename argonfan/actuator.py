#!/usr/bin/env python3
"""
apply duty cycles to the selected backend

The actuator starts with whatever the BackendSelector decided on. If the
Argon MCU stops responding it falls back to the native PWM interface
(if there is one). There is no way back: once PWM is active it stays
active until the process is restarted.
"""

import logging
from enum import Enum
from typing import Callable

# module busio provides no type hints
import busio  # type: ignore

from argonfan.backends import ArgonMcu, FanBackend, SysfsPwm, open_i2c_bus
from argonfan.conversions import clamp_dutycycle
from argonfan.errors import WriteFailed
from argonfan.selection import BackendKind, BackendState

LH = logging.getLogger('argonfan')

# number of consecutive failed I²C writes before switching to PWM
I2C_FAIL_THRESHOLD = 5


class ActuatorState(Enum):
    I2C_ACTIVE = 1
    PWM_ACTIVE = 2
    FAILED     = 3  # no backend available


class Actuator:

    def __init__(self, state: BackendState, i2c_bus_factory: Callable[[int], busio.I2C] = open_i2c_bus):
        self._state = state
        self._i2c_bus_factory = i2c_bus_factory
        self._i2c_backend: FanBackend | None = None
        self._pwm_backend: FanBackend | None = None
        if state.pwm_path is not None:
            self._pwm_backend = SysfsPwm(hwmon_dir=state.pwm_path)

    @property
    def state(self) -> ActuatorState:
        if self._state.kind == BackendKind.I2C:
            return ActuatorState.I2C_ACTIVE
        elif self._state.kind == BackendKind.PWM:
            return ActuatorState.PWM_ACTIVE
        else:
            return ActuatorState.FAILED

    @property
    def backend_state(self) -> BackendState:
        return self._state

    def describe(self) -> str:
        return self._state.kind.value

    def write(self, dutycycle: int) -> bool:
        """
        set the fan speed to the provided duty cycle (0..100%)
         - returns 'True' if the duty cycle was applied and 'False' otherwise
         - never raises, a failed write is retried with the next call
        """
        value = clamp_dutycycle(dutycycle)
        state = self.state
        if state == ActuatorState.I2C_ACTIVE:
            return self._write_i2c(value)
        elif state == ActuatorState.PWM_ACTIVE:
            return self._write_pwm(value)
        else:
            LH.error("No backend selected. Unable to set fan speed to %i%%.", value)
            return False

    def _write_i2c(self, value: int) -> bool:
        try:
            self._get_i2c_backend().set_dutycycle(value)
        except WriteFailed as e:
            self._state.consecutive_i2c_failures += 1
            LH.warning("%s (%i/%i)", e, self._state.consecutive_i2c_failures, I2C_FAIL_THRESHOLD)
            if self._state.consecutive_i2c_failures >= I2C_FAIL_THRESHOLD and self._state.pwm_path is not None:
                LH.warning("Switching backend to PWM at %s.", self._state.pwm_path)
                self._state.kind = BackendKind.PWM
                # apply the duty cycle right away instead of waiting for the next cycle
                return self._write_pwm(value)
            return False
        self._state.consecutive_i2c_failures = 0
        return True

    def _write_pwm(self, value: int) -> bool:
        if self._pwm_backend is None:
            LH.error("PWM backend is active but no PWM interface is known.")
            return False
        try:
            self._pwm_backend.set_dutycycle(value)
        except WriteFailed as e:
            LH.warning("PWM write failed: %s", e)
            return False
        return True

    def _get_i2c_backend(self) -> FanBackend:
        """
        open the I²C bus on first use
         - raises WriteFailed if the bus can't be opened (counts as failed write)
        """
        if self._i2c_backend is None:
            bus_nr = self._state.i2c_bus
            if bus_nr is None:
                raise WriteFailed("No I²C bus selected.")
            try:
                i2c_bus = self._i2c_bus_factory(bus_nr)
            except (OSError, RuntimeError, ValueError) as e:
                raise WriteFailed(f"Unable to open I²C bus {bus_nr}: {e}") from e
            self._i2c_backend = ArgonMcu(i2c_bus=i2c_bus, bus_nr=bus_nr)
        return self._i2c_backend
