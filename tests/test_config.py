"""Tests for dhtmon.config."""

from dhtmon.config import (
    HTTP_PORT,
    INTERVAL,
    SCALE_CELSIUS,
    SCALE_FAHRENHEIT,
    SENSOR_MODEL,
    SENSOR_MODELS,
    TEMPERATURE_METRIC,
    HUMIDITY_METRIC,
)


def test_http_port_is_valid():
    """HTTP_PORT is an int in the TCP port range."""
    assert isinstance(HTTP_PORT, int)
    assert 0 < HTTP_PORT < 65536


def test_interval_is_positive():
    """INTERVAL is a positive number of seconds."""
    assert INTERVAL > 0


def test_sensor_model_is_supported():
    """The default SENSOR_MODEL is one of SENSOR_MODELS."""
    assert SENSOR_MODEL in SENSOR_MODELS


def test_metric_names():
    """Metric names share the sensor prefix and end in a unit."""
    assert HUMIDITY_METRIC == "dht22_humidity_percent"
    assert TEMPERATURE_METRIC == "dht22_temperature"
    assert (SCALE_CELSIUS, SCALE_FAHRENHEIT) == ("celsius", "fahrenheit")
