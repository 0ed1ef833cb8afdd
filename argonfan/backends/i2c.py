#!/usr/bin/env python3
"""
fan control via the Argon ONE's microcontroller

The MCU listens on I²C address 0x1A (some revisions use 0x1B). Newer
firmware expects the duty cycle in register 0x80, older firmware accepts
a single byte containing nothing but the duty cycle.
"""

import logging
from enum import Enum

# module busio provides no type hints
import busio  # type: ignore
from feeph.i2c import BurstHandler

from argonfan.backends.base_class import FanBackend
from argonfan.conversions import clamp_dutycycle
from argonfan.errors import WriteFailed

LH = logging.getLogger('argonfan')

I2C_ADDRESSES = (0x1A, 0x1B)
FAN_REGISTER  = 0x80


class WriteMode(Enum):
    REGISTER = 1  # [0x80, dutycycle]
    LEGACY   = 2  # [dutycycle]


class ArgonMcu(FanBackend):

    def __init__(self, i2c_bus: busio.I2C, bus_nr: int | None = None):
        self._i2c_bus = i2c_bus
        self._bus_nr = bus_nr

    def set_dutycycle(self, dutycycle: int):
        """
        try all known write variants and stop at the first one that works
         - register write to 0x1A and 0x1B
         - legacy write to 0x1A and 0x1B
         - raises WriteFailed if none of them worked
        """
        value = clamp_dutycycle(dutycycle)
        for mode in WriteMode:
            for i2c_adr in I2C_ADDRESSES:
                try:
                    if mode == WriteMode.REGISTER:
                        self._write_register(i2c_adr=i2c_adr, value=value)
                    else:
                        self._write_byte(i2c_adr=i2c_adr, value=value)
                except (OSError, RuntimeError) as e:
                    # [Errno 121] Remote I/O error
                    LH.debug("%s write to 0x%02X failed: %s", mode.name.lower(), i2c_adr, e)
                    continue
                LH.debug("%s write to 0x%02X succeeded (%i%%)", mode.name.lower(), i2c_adr, value)
                return
        raise WriteFailed(f"Unable to set duty cycle on {self.describe()} (tried register and legacy writes on 0x1A/0x1B).")

    def describe(self) -> str:
        if self._bus_nr is not None:
            return f"I²C bus {self._bus_nr}"
        else:
            return "I²C bus"

    def _write_register(self, i2c_adr: int, value: int):
        with BurstHandler(i2c_bus=self._i2c_bus, i2c_adr=i2c_adr) as bh:
            bh.write_register(FAN_REGISTER, value)

    def _write_byte(self, i2c_adr: int, value: int):
        if not self._i2c_bus.try_lock():
            raise RuntimeError("Unable to acquire lock on I²C bus.")
        try:
            # function does not return any values
            self._i2c_bus.writeto(i2c_adr, bytes([value]))
        finally:
            self._i2c_bus.unlock()


def open_i2c_bus(bus_nr: int) -> busio.I2C:
    """
    open the I²C bus with the provided number (/dev/i2c-<bus_nr>)
    """
    # import on demand, the extended bus is only available on Linux
    from adafruit_extended_bus import ExtendedI2C  # type: ignore
    return ExtendedI2C(bus_nr)
