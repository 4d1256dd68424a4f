"""Temperature/humidity reading dataclass.

Produced by the sensor reader once per cycle and handed to the
metrics exposer.  Nothing is persisted; each reading simply
supersedes the previous one.

Example:
    >>> from dhtmon.reading import Reading
    >>> r = Reading(temperature=22.0, humidity=50.0)
    >>> r.fahrenheit
    71.6
"""

from dataclasses import dataclass


def celsius_to_fahrenheit(celsius: float) -> float:
    """Convert degrees Celsius to degrees Fahrenheit.

    Example:
        >>> celsius_to_fahrenheit(20.0)
        68.0
    """
    return celsius * 9 / 5 + 32


@dataclass
class Reading:
    """A single reading from the sensor.

    Temperature is in degrees C, humidity in percent relative humidity.
    """

    temperature: float
    humidity: float

    @property
    def fahrenheit(self) -> float:
        """Temperature in degrees F."""
        return celsius_to_fahrenheit(self.temperature)


def fmt_reading(r: Reading | None) -> str:
    """Format a reading for log output.

    Example:
        >>> fmt_reading(Reading(temperature=22.0, humidity=50.0))
        '22.0C 71.6F 50.0%'
        >>> fmt_reading(None)
        '--.-C --.-F --.-%'
    """
    if r is None:
        return "--.-C --.-F --.-%"
    return f"{r.temperature:.1f}C {r.fahrenheit:.1f}F {r.humidity:.1f}%"
