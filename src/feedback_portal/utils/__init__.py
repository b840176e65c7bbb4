"""Utility helpers for the feedback portal."""

from .logger import JsonFormatter, setup_logger

__all__ = ["JsonFormatter", "setup_logger"]
