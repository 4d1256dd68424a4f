"""dhtmon -- DHT temperature/humidity sensor exporter for Prometheus."""
