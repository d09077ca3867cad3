"""Prometheus exporter for DigitalOcean account, billing and inventory data."""

__version__ = "0.1.0"
