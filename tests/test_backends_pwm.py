#!/usr/bin/env python3
# pylint: disable=missing-class-docstring,missing-function-docstring,missing-module-docstring

import os
import tempfile
import unittest

import argonfan.backends.pwm as sut  # sytem under test
from argonfan.errors import WriteFailed


class TestSysfsPwm(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.hwmon_dir = os.path.join(self.tmpdir.name, 'hwmon2')
        os.makedirs(self.hwmon_dir)
        for name, value in [('pwm1', '0'), ('pwm1_enable', '2')]:
            with open(os.path.join(self.hwmon_dir, name), 'w') as fh:
                fh.write(f"{value}\n")

    def tearDown(self):
        self.tmpdir.cleanup()

    def read_attribute(self, name: str) -> str:
        with open(os.path.join(self.hwmon_dir, name), 'r') as fh:
            return fh.read().strip()

    def test_set_dutycycle(self):
        values = {
              0:   '0',  # noqa: E131
             50: '127',  # noqa: E131
            100: '255',
            120: '255',
        }
        backend = sut.SysfsPwm(hwmon_dir=self.hwmon_dir)
        for dutycycle, pwm in values.items():
            backend.set_dutycycle(dutycycle)
            # -------------------------------------------------------------
            self.assertEqual(self.read_attribute('pwm1'), pwm)
            self.assertEqual(self.read_attribute('pwm1_enable'), '1')

    def test_missing_interface(self):
        backend = sut.SysfsPwm(hwmon_dir=os.path.join(self.tmpdir.name, 'missing'))
        # -----------------------------------------------------------------
        # -----------------------------------------------------------------
        self.assertRaises(WriteFailed, backend.set_dutycycle, 50)

    def test_describe(self):
        self.assertEqual(sut.SysfsPwm(hwmon_dir='/sys/class/hwmon/hwmon2').describe(), "PWM at /sys/class/hwmon/hwmon2")
