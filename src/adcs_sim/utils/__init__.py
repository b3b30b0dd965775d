"""Shared utilities."""

from adcs_sim.utils.logging_config import setup_logging

__all__ = ["setup_logging"]
