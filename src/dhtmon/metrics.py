"""Prometheus gauges for the latest sensor reading and their HTTP endpoint.

Holds one humidity gauge and one temperature gauge split by a
``scale`` label into celsius and fahrenheit series.  The endpoint
answers every request, whatever its path or method, with the full
text exposition of the registry.

Example:
    >>> from dhtmon.metrics import MetricsExposer
    >>> exposer = MetricsExposer()
    >>> server = exposer.serve(8000)
    >>> exposer.set_temperature(22.0)
    >>> exposer.set_humidity(50.0)
"""

import logging
import threading
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    generate_latest,
)

from dhtmon.config import (
    HUMIDITY_METRIC,
    READ_ERRORS_METRIC,
    SCALE_CELSIUS,
    SCALE_FAHRENHEIT,
    TEMPERATURE_METRIC,
)
from dhtmon.reading import Reading, celsius_to_fahrenheit

log = logging.getLogger(__name__)


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """WSGI server handling each request in its own thread.

    ``render`` is set by MetricsExposer.serve to the exposition callable.
    """

    daemon_threads = True
    render = None


class _QuietHandler(WSGIRequestHandler):
    """Request handler that sends access logs to the module logger.

    Requests the HTTP parser rejects still get the full listing.
    """

    def log_message(self, format, *args):
        log.debug("%s %s", self.address_string(), format % args)

    def send_error(self, code, message=None, explain=None):
        log.debug(
            "%s unparseable request (%d %s), sending listing anyway",
            self.address_string(), code, message,
        )
        # Unparsed requests default to HTTP/0.9, which suppresses headers.
        self.request_version = "HTTP/1.0"
        self.close_connection = True
        output = self.server.render()
        self.send_response(200)
        self.send_header("Content-Type", CONTENT_TYPE_LATEST)
        self.send_header("Content-Length", str(len(output)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(output)


class MetricsExposer:
    """Gauges for the most recent reading, served over HTTP.

    Gauge identities are fixed at construction; only their values
    change.  Both temperature series start at 0 so that a scrape
    before the first successful read still sees every series.

    Args:
        registry: ``CollectorRegistry`` to register on.  Defaults to
            the global registry, which also carries the client
            library's process and platform metrics.
    """

    def __init__(self, registry=None):
        """Create and register the gauges."""
        if registry is None:
            registry = REGISTRY
        self._registry = registry
        self._server = None
        self._thread = None

        self._humidity = Gauge(
            HUMIDITY_METRIC,
            "Relative humidity in percent",
            registry=registry,
        )
        self._temperature = Gauge(
            TEMPERATURE_METRIC,
            "Temperature by scale",
            ["scale"],
            registry=registry,
        )
        self._celsius = self._temperature.labels(scale=SCALE_CELSIUS)
        self._fahrenheit = self._temperature.labels(scale=SCALE_FAHRENHEIT)
        self._errors = Counter(
            READ_ERRORS_METRIC,
            "Number of failed sensor reads",
            registry=registry,
        )

    @property
    def registry(self):
        """The ``CollectorRegistry`` the gauges live on."""
        return self._registry

    def set_humidity(self, value: float) -> None:
        """Overwrite the humidity gauge.  The value is not validated."""
        self._humidity.set(value)

    def set_temperature(self, celsius: float) -> None:
        """Overwrite both temperature series from a celsius value."""
        self._celsius.set(celsius)
        self._fahrenheit.set(celsius_to_fahrenheit(celsius))

    def update(self, reading: Reading) -> None:
        """Store every value of *reading*."""
        self.set_temperature(reading.temperature)
        self.set_humidity(reading.humidity)

    def record_error(self) -> None:
        """Count one failed sensor read."""
        self._errors.inc()

    def render(self) -> bytes:
        """Return the current text exposition of the registry."""
        return generate_latest(self._registry)

    def _app(self, environ, start_response):
        """WSGI app: the same listing for every request."""
        output = self.render()
        start_response("200 OK", [
            ("Content-Type", CONTENT_TYPE_LATEST),
            ("Content-Length", str(len(output))),
        ])
        return [output]

    def serve(self, port: int, addr: str = ""):
        """Start serving the metrics on *addr*:*port* in a background thread.

        Binding happens before this returns, so a port that is already
        in use raises here rather than in the serving thread.  Pass
        port 0 to bind an ephemeral port and read it back from the
        returned server's ``server_port``.

        Raises:
            OSError: If the socket cannot be bound.
            RuntimeError: If the exposer is already serving.
        """
        if self._server is not None:
            raise RuntimeError("metrics endpoint already running")

        server = make_server(
            addr, port, self._app,
            server_class=_ThreadingWSGIServer,
            handler_class=_QuietHandler,
        )
        server.render = self.render
        thread = threading.Thread(
            target=server.serve_forever, name="metrics-http", daemon=True,
        )
        thread.start()
        self._server = server
        self._thread = thread
        log.info("serving metrics on %s:%d", addr or "*", server.server_port)
        return server

    def shutdown(self) -> None:
        """Stop the HTTP server, if running, and close its socket."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        self._thread.join()
        self._server = None
        self._thread = None
