"""Exporter daemon -- reads the sensor and publishes it as metrics.

Opens the sensor, starts the HTTP metrics endpoint, then reads the
sensor every ``config.INTERVAL`` seconds, updating the gauges after
each successful read.  Failed reads are logged and skipped; the
gauges keep their previous values.  Shuts down cleanly on SIGINT or
SIGTERM.

Example:
    Run from the command line::

        dhtmon -v
"""

import argparse
import logging
import signal
import sys
import threading

from dhtmon.config import (
    HTTP_ADDR,
    HTTP_PORT,
    INTERVAL,
    SENSOR_MODEL,
    SENSOR_PIN,
)
from dhtmon.metrics import MetricsExposer
from dhtmon.sensor import open_sensor

log = logging.getLogger(__name__)

_shutdown = threading.Event()


def _on_signal(signum: int, frame) -> None:
    """Set the module-level shutdown event on SIGINT/SIGTERM."""
    _shutdown.set()


def run_poller(sensor, exposer, interval: float,
               shutdown: threading.Event) -> int:
    """Run the read loop until *shutdown* is set.

    Reads the sensor, updates *exposer* on success, sleeps for
    *interval* seconds, and repeats.  Returns the number of completed
    cycles.

    Example:
        >>> run_poller(sensor, exposer, 30, ev)
        5
    """
    cycles = 0

    while not shutdown.is_set():
        reading = sensor.read()
        cycles += 1
        if reading is not None:
            exposer.update(reading)
            log.info(
                "temperature=%.1fC humidity=%.1f%%",
                reading.temperature, reading.humidity,
            )
        else:
            exposer.record_error()
            log.error(
                "cycle %d: no reading from sensor: %s",
                cycles, sensor.last_error or "unknown error",
            )
        if interval > 0:
            shutdown.wait(interval)

    return cycles


def main() -> None:
    """CLI entry point -- configure logging, start serving, run the loop.

    Exits with status 1 if the sensor cannot be opened or the metrics
    port cannot be bound.
    """
    _shutdown.clear()

    parser = argparse.ArgumentParser(
        description="DHT temperature/humidity Prometheus exporter",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging",
    )
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=level,
    )

    log.info(
        "starting: sensor=%s pin=%s port=%d interval=%ds",
        SENSOR_MODEL, SENSOR_PIN, HTTP_PORT, INTERVAL,
    )

    try:
        sensor = open_sensor(SENSOR_MODEL, SENSOR_PIN)
    except (ValueError, RuntimeError, OSError, NotImplementedError) as exc:
        log.error("cannot open sensor: %s", exc)
        sys.exit(1)

    exposer = MetricsExposer()
    try:
        exposer.serve(HTTP_PORT, HTTP_ADDR)
    except OSError as exc:
        log.error("cannot bind metrics port %d: %s", HTTP_PORT, exc)
        sensor.close()
        sys.exit(1)

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    try:
        run_poller(sensor, exposer, INTERVAL, _shutdown)
    finally:
        sensor.close()
        exposer.shutdown()
        log.info("shutting down")


if __name__ == "__main__":
    main()
