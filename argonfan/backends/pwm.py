#!/usr/bin/env python3
"""
native PWM fan control via the kernel's hwmon interface

The Raspberry Pi 5 exposes its fan header as a hwmon device
(e.g. '/sys/devices/platform/cooling_fan/hwmon/hwmon2'):
  - pwm1_enable: 1 = manual control
  - pwm1:        0..255
"""

import logging
import os

from argonfan.backends.base_class import FanBackend
from argonfan.conversions import convert_dutycycle2pwm
from argonfan.errors import WriteFailed

LH = logging.getLogger('argonfan')


class SysfsPwm(FanBackend):

    def __init__(self, hwmon_dir: str):
        self._hwmon_dir = hwmon_dir

    def set_dutycycle(self, dutycycle: int):
        value = convert_dutycycle2pwm(dutycycle)
        LH.debug("PWM: %i%% -> %i/255", dutycycle, value)
        # order is important! (switch to manual control before setting the speed)
        self._write_attribute('pwm1_enable', 1)
        self._write_attribute('pwm1', value)

    def describe(self) -> str:
        return f"PWM at {self._hwmon_dir}"

    def _write_attribute(self, name: str, value: int):
        path = os.path.join(self._hwmon_dir, name)
        try:
            with open(path, 'w') as fh:
                fh.write(f"{value}\n")
        except OSError as e:
            raise WriteFailed(f"Unable to write '{value}' to '{path}': {e}") from e
