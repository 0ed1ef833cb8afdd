#!/usr/bin/env python3
# pylint: disable=missing-class-docstring,missing-function-docstring,missing-module-docstring

import unittest

from simulated_i2c import SimulatedI2cBus

import argonfan.backends.i2c as sut  # sytem under test
from argonfan.errors import WriteFailed


class TestArgonMcu(unittest.TestCase):

    def test_register_write(self):
        i2c_bus = SimulatedI2cBus(addresses=[0x1A])
        backend = sut.ArgonMcu(i2c_bus=i2c_bus, bus_nr=1)
        # -----------------------------------------------------------------
        backend.set_dutycycle(42)
        computed = i2c_bus.writes[-1]
        expected = (0x1A, bytes([0x80, 42]))
        # -----------------------------------------------------------------
        self.assertEqual(computed, expected)
        self.assertNotIn((0x1A, bytes([42])), i2c_bus.writes)

    def test_register_write_alternative_address(self):
        i2c_bus = SimulatedI2cBus(addresses=[0x1B])
        backend = sut.ArgonMcu(i2c_bus=i2c_bus, bus_nr=1)
        # -----------------------------------------------------------------
        backend.set_dutycycle(42)
        computed = i2c_bus.writes[-1]
        expected = (0x1B, bytes([0x80, 42]))
        # -----------------------------------------------------------------
        self.assertEqual(computed, expected)

    def test_register_write_preferred_over_legacy_write(self):
        # 0x1A only understands legacy writes, 0x1B understands both
        i2c_bus = SimulatedI2cBus(addresses=[0x1A, 0x1B], legacy_only=[0x1A])
        backend = sut.ArgonMcu(i2c_bus=i2c_bus, bus_nr=1)
        # -----------------------------------------------------------------
        backend.set_dutycycle(42)
        computed = i2c_bus.writes
        expected = [(0x1B, bytes([0x80, 42]))]
        # -----------------------------------------------------------------
        self.assertEqual(computed, expected)

    def test_legacy_write(self):
        i2c_bus = SimulatedI2cBus(addresses=[0x1A], legacy_only=[0x1A])
        backend = sut.ArgonMcu(i2c_bus=i2c_bus, bus_nr=1)
        # -----------------------------------------------------------------
        backend.set_dutycycle(42)
        computed = i2c_bus.writes
        expected = [(0x1A, bytes([42]))]
        # -----------------------------------------------------------------
        self.assertEqual(computed, expected)

    def test_legacy_write_alternative_address(self):
        i2c_bus = SimulatedI2cBus(addresses=[0x1A, 0x1B], failing=[0x1A], legacy_only=[0x1B])
        backend = sut.ArgonMcu(i2c_bus=i2c_bus, bus_nr=1)
        # -----------------------------------------------------------------
        backend.set_dutycycle(42)
        computed = i2c_bus.writes
        expected = [(0x1B, bytes([42]))]
        # -----------------------------------------------------------------
        self.assertEqual(computed, expected)

    def test_clamping(self):
        i2c_bus = SimulatedI2cBus(addresses=[0x1A])
        backend = sut.ArgonMcu(i2c_bus=i2c_bus, bus_nr=1)
        # -----------------------------------------------------------------
        backend.set_dutycycle(150)
        backend.set_dutycycle(-5)
        # -----------------------------------------------------------------
        self.assertEqual(i2c_bus.writes[0], (0x1A, bytes([0x80, 100])))
        self.assertEqual(i2c_bus.writes[-1], (0x1A, bytes([0x80, 0])))

    def test_no_device(self):
        i2c_bus = SimulatedI2cBus(addresses=[])
        backend = sut.ArgonMcu(i2c_bus=i2c_bus, bus_nr=1)
        # -----------------------------------------------------------------
        # -----------------------------------------------------------------
        self.assertRaises(WriteFailed, backend.set_dutycycle, 50)
        self.assertEqual(i2c_bus.writes, [])
        # the bus must not stay locked after a failed write
        self.assertTrue(i2c_bus.try_lock())

    def test_describe(self):
        self.assertEqual(sut.ArgonMcu(i2c_bus=SimulatedI2cBus(), bus_nr=13).describe(), "I²C bus 13")
        self.assertEqual(sut.ArgonMcu(i2c_bus=SimulatedI2cBus()).describe(), "I²C bus")
