"""Sensor payloads, node registry, alert thresholds, HTTP client, gateway and dashboard state."""

__version__ = "0.1.0"