"""Sonar — OpenRadar bug tracker client."""

__version__ = "0.1.0"
