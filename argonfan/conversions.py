#!/usr/bin/env python3
"""
conversion-related functions
"""

import math

# duty cycle limits (in percent)
DUTYCYCLE_MIN = 0
DUTYCYCLE_MAX = 100

# the native PWM interface expects values in range 0..255
PWM_MAX = 255


def convert_millidegrees2celsius(value: int) -> float:
    """
    convert the kernel's thermal zone reading to degrees Celsius
    (48312 -> 48.3)
    """
    return round(value / 1000, 1)


def convert_celsius2fahrenheit(value: float) -> float:
    """
    (48.3 -> 118.9)
    """
    return round(value * 9 / 5 + 32, 1)


def convert_fahrenheit2celsius(value: float) -> float:
    """
    (118.9 -> 48.3)
    """
    return round((value - 32) * 5 / 9, 1)


def convert_temperature2dutycycle(temperature: float, temp_min: float, temp_max: float) -> int:
    """
    map the provided temperature onto a duty cycle (0..100%)
     - linear interpolation between temp_min (0%) and temp_max (100%)
     - fractional values are truncated, not rounded
    """
    if temperature <= temp_min:
        return DUTYCYCLE_MIN
    if temperature >= temp_max:
        return DUTYCYCLE_MAX
    if temp_max == temp_min:
        return DUTYCYCLE_MIN
    return math.floor((temperature - temp_min) * 100 / (temp_max - temp_min))


def clamp_dutycycle(value: int) -> int:
    return max(DUTYCYCLE_MIN, min(DUTYCYCLE_MAX, int(value)))


def convert_dutycycle2pwm(value: int) -> int:
    """
    convert the provided duty cycle to the PWM interface's native range
    (0% -> 0, 50% -> 127, 100% -> 255)
    """
    return clamp_dutycycle(value) * PWM_MAX // 100
