#!/usr/bin/env python3
# pylint: disable=missing-class-docstring,missing-function-docstring,missing-module-docstring

import unittest
from unittest import mock

import requests

import argonfan.reporting as sut  # sytem under test
from argonfan.errors import ReportingFailed
from argonfan.options import TemperatureUnit


class TestPayload(unittest.TestCase):

    def test_build_payload(self):
        event = sut.ReportEvent(duty=50, temperature=158.0, unit=TemperatureUnit.FAHRENHEIT)
        # -----------------------------------------------------------------
        computed = sut.build_payload(event)
        expected = {
            'state': 50,
            'attributes': {
                'unit_of_measurement': '%',
                'icon': 'mdi:fan',
                'Temperature °F': 158.0,
                'friendly_name': 'Argon Fan Speed',
            },
        }
        # -----------------------------------------------------------------
        self.assertEqual(computed, expected)

    def test_build_payload_celsius(self):
        event = sut.ReportEvent(duty=0, temperature=42.1, unit=TemperatureUnit.CELSIUS)
        # -----------------------------------------------------------------
        computed = sut.build_payload(event)['attributes']
        # -----------------------------------------------------------------
        self.assertEqual(computed['Temperature °C'], 42.1)


class TestHomeAssistantReporter(unittest.TestCase):

    def setUp(self):
        self.event = sut.ReportEvent(duty=50, temperature=70.0, unit=TemperatureUnit.CELSIUS)
        self.reporter = sut.HomeAssistantReporter(token='secret', url='http://localhost/api/states/sensor.fan')

    def tearDown(self):
        self.reporter.shutdown(wait=True)

    @mock.patch('argonfan.reporting.requests.post')
    def test_send(self, post):
        post.return_value = mock.Mock(ok=True, status_code=200)
        # -----------------------------------------------------------------
        self.reporter.send(self.event)
        # -----------------------------------------------------------------
        post.assert_called_once_with(
            'http://localhost/api/states/sensor.fan',
            json=sut.build_payload(self.event),
            headers={'Authorization': 'Bearer secret', 'Content-Type': 'application/json'},
            timeout=sut.REQUEST_TIMEOUT,
        )

    @mock.patch('argonfan.reporting.requests.post')
    def test_send_rejected(self, post):
        post.return_value = mock.Mock(ok=False, status_code=401, reason='Unauthorized')
        # -----------------------------------------------------------------
        # -----------------------------------------------------------------
        self.assertRaises(ReportingFailed, self.reporter.send, self.event)

    @mock.patch('argonfan.reporting.requests.post')
    def test_send_unreachable(self, post):
        post.side_effect = requests.ConnectionError("connection refused")
        # -----------------------------------------------------------------
        # -----------------------------------------------------------------
        self.assertRaises(ReportingFailed, self.reporter.send, self.event)

    @mock.patch('argonfan.reporting.requests.post')
    def test_report_runs_in_background(self, post):
        post.return_value = mock.Mock(ok=True, status_code=200)
        # -----------------------------------------------------------------
        future = self.reporter.report(self.event)
        computed = future.result(timeout=5)
        # -----------------------------------------------------------------
        self.assertIsNone(computed)
        post.assert_called_once()

    @mock.patch('argonfan.reporting.requests.post')
    def test_report_swallows_errors(self, post):
        post.side_effect = requests.Timeout("no reply")
        # -----------------------------------------------------------------
        future = self.reporter.report(self.event)
        # -----------------------------------------------------------------
        self.assertIsNone(future.result(timeout=5))
        self.assertIsNone(future.exception(timeout=5))

    @mock.patch.dict('os.environ', {'SUPERVISOR_TOKEN': 'from-env'})
    @mock.patch('argonfan.reporting.requests.post')
    def test_token_from_environment(self, post):
        post.return_value = mock.Mock(ok=True, status_code=200)
        reporter = sut.HomeAssistantReporter()
        # -----------------------------------------------------------------
        reporter.send(self.event)
        reporter.shutdown(wait=True)
        # -----------------------------------------------------------------
        self.assertEqual(post.call_args.kwargs['headers']['Authorization'], 'Bearer from-env')
        self.assertEqual(post.call_args.args[0], sut.STATE_URL)
