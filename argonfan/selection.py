#!/usr/bin/env python3
"""
decide which backend drives the fan

This happens exactly once at startup. The I²C bus is identified by
read-probing all addresses and looking for the Argon MCU (0x1A/0x1B).
Some buses answer on (almost) every address when probed. Such a 'dense'
grid is noise and not a genuine device, so the bus is skipped.
"""

import glob
import logging
import os
from enum import Enum
from typing import Callable

# module busio provides no type hints
import busio  # type: ignore
from attrs import define

from argonfan.backends.i2c import I2C_ADDRESSES, open_i2c_bus
from argonfan.errors import NoHardwareFound, ProbeFailed
from argonfan.options import BackendMode, Options

LH = logging.getLogger('argonfan')

# common Raspberry Pi buses in priority order
DEFAULT_BUSES = (0, 1, 13)

# a bus with more responding addresses is considered noisy
DENSE_THRESHOLD = 20

# hwmon directories which may provide a 'pwm1' file (in priority order)
PWM_SEARCH_PATTERNS = (
    'sys/devices/platform/cooling_fan/hwmon/*',  # Raspberry Pi 5 fan header
    'sys/class/hwmon/hwmon*',
)


class BackendKind(Enum):
    I2C        = 'I2C'
    PWM        = 'PWM'
    UNSELECTED = 'Unselected'


@define
class BackendState:
    """
    the backend currently driving the fan

    Owned by the Actuator, which is the only one allowed to modify it.
    """
    kind:                     BackendKind = BackendKind.UNSELECTED
    i2c_bus:                  int | None = None
    pwm_path:                 str | None = None
    consecutive_i2c_failures: int = 0


def is_genuine_scan(addresses: list[int]) -> bool:
    """
    check if the scan result contains the Argon MCU and isn't just noise
    """
    if len(addresses) > DENSE_THRESHOLD:
        LH.warning("Grid too dense (%i hits). Likely noisy, skipping.", len(addresses))
        return False
    return any(i2c_adr in addresses for i2c_adr in I2C_ADDRESSES)


class BackendSelector:

    def __init__(self, options: Options, i2c_bus_factory: Callable[[int], busio.I2C] = open_i2c_bus, dev_root: str = '/dev', sysfs_root: str = '/'):
        self._options = options
        self._i2c_bus_factory = i2c_bus_factory
        self._dev_root = dev_root
        self._sysfs_root = sysfs_root

    def select(self) -> BackendState:
        """
        probe the hardware and decide which backend to use
         - raises NoHardwareFound if neither backend is available
        """
        mode = self._options.backend_mode
        LH.info("Selecting backend (mode: %s).", mode.value)
        if mode == BackendMode.FORCE_PWM:
            pwm_path = self.detect_pwm_sysfs()
            if pwm_path is None:
                raise NoHardwareFound("Backend 'PWM' requested but no PWM interface was found.")
            LH.info("Using PWM interface at %s (forced).", pwm_path)
            return BackendState(kind=BackendKind.PWM, pwm_path=pwm_path)
        elif mode == BackendMode.FORCE_I2C:
            if self._options.bus_override is not None and len(self._options.bus_override) == 1:
                # trust the user, scanning is not necessary
                bus_nr = self._options.bus_override[0]
                LH.info("Using I²C bus %i (forced).", bus_nr)
                return BackendState(kind=BackendKind.I2C, i2c_bus=bus_nr)
            bus_nr = self.select_i2c_bus()
            if bus_nr is None:
                raise NoHardwareFound("Backend 'I2C' requested but no Argon MCU was found.")
            return BackendState(kind=BackendKind.I2C, i2c_bus=bus_nr)
        else:
            bus_nr = self.select_i2c_bus()
            # remember the PWM interface even if I²C works (fallback)
            pwm_path = self.detect_pwm_sysfs()
            if bus_nr is not None:
                if pwm_path is not None:
                    LH.info("PWM interface at %s is available as fallback.", pwm_path)
                return BackendState(kind=BackendKind.I2C, i2c_bus=bus_nr, pwm_path=pwm_path)
            LH.info("No Argon MCU found by read-probe.")
            if pwm_path is not None:
                LH.info("Using PWM interface at %s.", pwm_path)
                return BackendState(kind=BackendKind.PWM, pwm_path=pwm_path)
            raise NoHardwareFound("Neither an Argon MCU nor a PWM interface was found.")

    # ---------------------------------------------------------------------
    # I²C
    # ---------------------------------------------------------------------

    def get_candidate_buses(self) -> tuple[int, ...]:
        if self._options.bus_override is not None:
            LH.info("I²C bus override requested: %s", ', '.join(str(bus_nr) for bus_nr in self._options.bus_override))
            return self._options.bus_override
        else:
            return DEFAULT_BUSES

    def select_i2c_bus(self) -> int | None:
        """
        return the first bus with a genuine Argon MCU or 'None'
        """
        for bus_nr in self.get_candidate_buses():
            device = os.path.join(self._dev_root, f"i2c-{bus_nr}")
            if not os.path.exists(device):
                LH.debug("Skipping %s (absent).", device)
                continue
            LH.info("Read-probing %s.", device)
            try:
                addresses = self.scan_bus(bus_nr)
            except ProbeFailed as e:
                LH.warning("%s", e)
                continue
            LH.debug("bus %i: %s", bus_nr, ' '.join(f"{i2c_adr:02x}" for i2c_adr in addresses))
            if is_genuine_scan(addresses):
                LH.info("Selected %s by read-probe.", device)
                return bus_nr
            else:
                LH.info("No Argon MCU detected on %s.", device)
        return None

    def scan_bus(self, bus_nr: int) -> list[int]:
        """
        return all responding addresses on the provided bus
         - raises ProbeFailed if the bus could not be scanned
        """
        try:
            i2c_bus = self._i2c_bus_factory(bus_nr)
        except (OSError, RuntimeError, ValueError) as e:
            raise ProbeFailed(f"Unable to open I²C bus {bus_nr}: {e}") from e
        try:
            if not i2c_bus.try_lock():
                raise ProbeFailed(f"Unable to acquire lock on I²C bus {bus_nr}.")
            try:
                return sorted(i2c_bus.scan())
            finally:
                i2c_bus.unlock()
        except (OSError, RuntimeError, ValueError) as e:
            raise ProbeFailed(f"Unable to scan I²C bus {bus_nr}: {e}") from e
        finally:
            i2c_bus.deinit()

    # ---------------------------------------------------------------------
    # PWM
    # ---------------------------------------------------------------------

    def detect_pwm_sysfs(self) -> str | None:
        """
        return the first hwmon directory providing a 'pwm1' file or 'None'
        """
        for pattern in PWM_SEARCH_PATTERNS:
            for hwmon_dir in sorted(glob.glob(os.path.join(self._sysfs_root, pattern))):
                if os.path.exists(os.path.join(hwmon_dir, 'pwm1')):
                    LH.debug("Found PWM interface at %s.", hwmon_dir)
                    return hwmon_dir
        return None
