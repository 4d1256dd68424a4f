"""Sensor reader for DHT-family temperature/humidity sensors.

Wraps an ``adafruit_dht`` device and turns each measurement into a
Reading.  The single-wire DHT protocol is timing sensitive and fails
routinely; those failures are logged and reported as None so the
caller can simply try again next cycle.

Example:
    >>> from dhtmon.sensor import open_sensor
    >>> sensor = open_sensor("DHT22", "D4")
    >>> reading = sensor.read()
    >>> reading.temperature
    22.4
"""

import logging
import math

from dhtmon.config import SENSOR_MODELS
from dhtmon.reading import Reading, fmt_reading

log = logging.getLogger(__name__)


class DHTSensor:
    """Reads temperature and humidity from a DHT device.

    Duck-typed -- tests can substitute any object with ``temperature``
    and ``humidity`` attributes (and optionally ``exit()``) for the
    driver device.

    Args:
        device: An ``adafruit_dht.DHT11``/``DHT22`` instance or a
            compatible object.
    """

    def __init__(self, device):
        """Initialize the reader around *device*."""
        self._device = device
        self.last_error = None

    def read(self) -> Reading | None:
        """Take one measurement and return a Reading or None.

        Returns None on any transient driver failure: a ``RuntimeError``
        from the driver's checksum/timing checks, an ``OSError`` from
        GPIO access, or a missing or non-finite value.  The reason is
        kept in ``last_error`` for the caller to report.
        """
        self.last_error = None
        try:
            temperature = self._device.temperature
            humidity = self._device.humidity
        except RuntimeError as exc:
            self.last_error = "read failed: %s" % exc
            log.debug("sensor %s", self.last_error)
            return None
        except OSError as exc:
            self.last_error = "I/O error: %s" % exc
            log.debug("sensor %s", self.last_error)
            return None

        if temperature is None or humidity is None:
            self.last_error = (
                "no data: temperature=%s humidity=%s" % (temperature, humidity)
            )
            log.debug("sensor %s", self.last_error)
            return None

        temperature = float(temperature)
        humidity = float(humidity)
        if not (math.isfinite(temperature) and math.isfinite(humidity)):
            self.last_error = (
                "non-finite data: temperature=%s humidity=%s"
                % (temperature, humidity)
            )
            log.debug("sensor %s", self.last_error)
            return None

        reading = Reading(temperature=temperature, humidity=humidity)
        log.debug("sensor read: %s", fmt_reading(reading))
        return reading

    def close(self) -> None:
        """Release the driver's GPIO resources."""
        exit_fn = getattr(self._device, "exit", None)
        if exit_fn is not None:
            exit_fn()


def open_sensor(model: str, pin: str) -> DHTSensor:
    """Open a DHT sensor of *model* on the board pin named *pin*.

    The hardware libraries are imported here rather than at module
    level so the rest of the package works on machines without GPIO.

    Args:
        model: Driver class name in ``adafruit_dht`` (e.g. ``"DHT22"``).
        pin: Pin name in ``board`` (e.g. ``"D4"``).

    Raises:
        ValueError: If *model* or *pin* is not recognised.
    """
    if model not in SENSOR_MODELS:
        raise ValueError(
            "sensor model must be one of %s, got '%s'"
            % (", ".join(SENSOR_MODELS), model)
        )

    import adafruit_dht
    import board

    board_pin = getattr(board, pin, None)
    if board_pin is None:
        raise ValueError("unknown board pin: %s" % pin)

    device = getattr(adafruit_dht, model)(board_pin)
    log.info("opened %s sensor on pin %s", model, pin)
    return DHTSensor(device)
