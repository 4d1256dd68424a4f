#!/usr/bin/env python3
"""Synthetic sensor simulator for dhtmon.

Runs the exporter loop against a fake sensor instead of GPIO
hardware, so the metrics endpoint can be scraped on a development
machine.  Temperature and humidity drift by a small random step each
cycle; about 10% of reads fail, the way a real DHT22 does.

Usage:
    python simulator.py <port> <interval>

Args:
    port: TCP port for the metrics endpoint (e.g. 8000).
    interval: Seconds between reads (e.g. 2).
"""

import logging
import random
import signal
import sys
import threading

# Add parent src to path so we can import dhtmon
sys.path.insert(0, str(__import__("pathlib").Path(__file__).resolve().parents[1] / "src"))

from dhtmon.daemon import run_poller
from dhtmon.metrics import MetricsExposer
from dhtmon.reading import Reading


class RandomWalkSensor:
    """Sensor double producing drifting readings and occasional failures."""

    def __init__(self, temperature: float = 21.0, humidity: float = 45.0):
        """Start the walk at *temperature* and *humidity*."""
        self._temperature = temperature
        self._humidity = humidity
        self.last_error = None

    def read(self) -> Reading | None:
        """Return the next reading, or None ~10% of the time."""
        self.last_error = None
        if random.random() < 0.1:
            self.last_error = "simulated checksum failure"
            return None
        self._temperature += random.uniform(-0.3, 0.3)
        self._humidity = min(100.0, max(0.0,
                                        self._humidity + random.uniform(-1.0, 1.0)))
        return Reading(
            temperature=round(self._temperature, 1),
            humidity=round(self._humidity, 1),
        )

    def close(self) -> None:
        """No-op for interface compatibility."""
        pass


def run(port: int, interval: float) -> None:
    """Serve metrics on *port* and update them every *interval* seconds."""
    shutdown = threading.Event()
    signal.signal(signal.SIGINT, lambda signum, frame: shutdown.set())
    signal.signal(signal.SIGTERM, lambda signum, frame: shutdown.set())

    exposer = MetricsExposer()
    exposer.serve(port)
    print("simulator: serving on port {}".format(port), flush=True)

    try:
        run_poller(RandomWalkSensor(), exposer, interval, shutdown)
    finally:
        exposer.shutdown()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("usage: simulator.py <port> <interval>", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=logging.INFO,
    )
    run(int(sys.argv[1]), float(sys.argv[2]))
