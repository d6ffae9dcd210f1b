"""Frames, a work-stealing executor, wait services, IP addresses and socket options."""

__version__ = "0.1.0"