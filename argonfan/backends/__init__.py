#!/usr/bin/env python3
"""
"""

# the following imports are provided for user convenience
# flake8: noqa: F401

from argonfan.backends.base_class import FanBackend
from argonfan.backends.i2c import ArgonMcu, open_i2c_bus
from argonfan.backends.pwm import SysfsPwm
