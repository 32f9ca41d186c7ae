"""Prometheus exporter for NNFCM statistics and monitoring APIs."""

__version__ = "0.1.0"
