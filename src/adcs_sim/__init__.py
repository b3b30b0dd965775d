"""ADCS simulation hardware configuration and sensor/actuator factory."""

__version__ = "0.1.0"
