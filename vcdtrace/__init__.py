"""Trace signal values over time and write them as Value Change Dump files."""

__version__ = "0.1.0"