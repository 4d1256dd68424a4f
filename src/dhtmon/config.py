"""Project-wide configuration constants.

Central place for tuneable parameters shared across modules.
Import individual names where needed.  There is no config file;
edit these values to match the wiring of the board.

Example:
    >>> from dhtmon.config import HTTP_PORT, INTERVAL
    >>> HTTP_PORT
    8000
"""

# TCP port and bind address for the metrics endpoint ("" = all interfaces).
HTTP_PORT = 8000
HTTP_ADDR = ""

# Seconds to sleep between sensor reads.
INTERVAL = 30

# Driver class in adafruit_dht and pin name in board.
SENSOR_MODEL = "DHT22"
SENSOR_PIN = "D4"

SENSOR_MODELS = ("DHT11", "DHT21", "DHT22")

HUMIDITY_METRIC = "dht22_humidity_percent"
TEMPERATURE_METRIC = "dht22_temperature"
READ_ERRORS_METRIC = "dht22_read_errors"

# Label values for TEMPERATURE_METRIC's "scale" label.
SCALE_CELSIUS = "celsius"
SCALE_FAHRENHEIT = "fahrenheit"
