"""Shared pytest fixtures for dhtmon tests."""

import pytest
from prometheus_client import CollectorRegistry

from dhtmon.metrics import MetricsExposer


class FakeDevice:
    """Test double for an adafruit_dht device.

    Each entry in *values* is either a ``(temperature, humidity)``
    tuple or an exception instance raised on access.
    """

    def __init__(self, values: list):
        """Initialize with canned values."""
        self._values = list(values)
        self._current = None
        self.exited = False

    @property
    def temperature(self):
        """Advance to the next canned value and return its temperature."""
        self._current = self._values.pop(0)
        if isinstance(self._current, Exception):
            raise self._current
        return self._current[0]

    @property
    def humidity(self):
        """Return the humidity of the value fetched by ``temperature``."""
        return self._current[1]

    def exit(self) -> None:
        """Record that the device was released."""
        self.exited = True


class FakeSensor:
    """Test double for DHTSensor: canned readings, None for failures."""

    def __init__(self, readings: list):
        """Initialize with canned readings (Reading or None)."""
        self._readings = list(readings)
        self.last_error = None
        self.read_count = 0
        self.closed = False

    def read(self):
        """Return the next canned reading, or None if exhausted."""
        self.read_count += 1
        reading = self._readings.pop(0) if self._readings else None
        self.last_error = None if reading is not None else "canned failure"
        return reading

    def close(self) -> None:
        """Record the close."""
        self.closed = True


@pytest.fixture
def registry():
    """A fresh CollectorRegistry per test."""
    return CollectorRegistry()


@pytest.fixture
def exposer(registry):
    """A MetricsExposer on its own registry, shut down after the test."""
    exp = MetricsExposer(registry)
    yield exp
    exp.shutdown()
