#!/usr/bin/env python3
"""
"""

from abc import ABC, abstractmethod


class FanBackend(ABC):
    """
    abstract base class for fan backends
    """

    @abstractmethod
    def set_dutycycle(self, dutycycle: int):
        """
        apply the provided duty cycle (0..100%)
         - raises WriteFailed if the fan speed could not be set
        """
        ...

    @abstractmethod
    def describe(self) -> str:
        ...
