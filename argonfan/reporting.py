#!/usr/bin/env python3
"""
publish the fan speed as a Home Assistant entity

Reports are fire-and-forget: they are handed over to a background worker
and the control loop never waits for them. Whatever happens to the request
(success, timeout, refused connection) has no effect on fan control.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor

import requests
from attrs import frozen

from argonfan.errors import ReportingFailed
from argonfan.options import TemperatureUnit

LH = logging.getLogger('argonfan')

STATE_URL = 'http://hassio/homeassistant/api/states/sensor.argon_one_addon_fan_speed'

# seconds to wait for Home Assistant before giving up
# (applies to connecting and to each read, not to the whole response)
REQUEST_TIMEOUT = 5


@frozen
class ReportEvent:
    duty:        int
    temperature: float
    unit:        TemperatureUnit


def build_payload(event: ReportEvent) -> dict:
    return {
        'state': event.duty,
        'attributes': {
            'unit_of_measurement': '%',
            'icon': 'mdi:fan',
            f"Temperature {event.unit.symbol}": event.temperature,
            'friendly_name': 'Argon Fan Speed',
        },
    }


class HomeAssistantReporter:

    def __init__(self, token: str | None = None, url: str = STATE_URL, timeout: float = REQUEST_TIMEOUT):
        if token is None:
            token = os.environ.get('SUPERVISOR_TOKEN')
        if not token:
            LH.warning("SUPERVISOR_TOKEN is not set. Home Assistant will probably reject the fan speed reports.")
        self._token = token or ''
        self._url = url
        self._timeout = timeout
        # a single worker is plenty, there's one report every poll interval
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='reporter')

    def report(self, event: ReportEvent) -> Future:
        """
        hand the event over to the background worker and return immediately
        """
        return self._executor.submit(self._send_quietly, event)

    def send(self, event: ReportEvent):
        """
        publish the event (blocking)
         - raises ReportingFailed if Home Assistant did not accept the state
        """
        headers = {
            'Authorization': f"Bearer {self._token}",
            'Content-Type': 'application/json',
        }
        try:
            response = requests.post(self._url, json=build_payload(event), headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise ReportingFailed(f"Home Assistant API unreachable: {e}") from e
        if not response.ok:
            raise ReportingFailed(f"Home Assistant API rejected the state: {response.status_code} {response.reason}")
        LH.debug("reported fan speed %i%% (HTTP %i)", event.duty, response.status_code)

    def shutdown(self, wait: bool = False):
        self._executor.shutdown(wait=wait, cancel_futures=True)

    def _send_quietly(self, event: ReportEvent):
        try:
            self.send(event)
        except ReportingFailed as e:
            LH.warning("%s", e)
