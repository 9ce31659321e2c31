"""Snapbridge - wallet snap bridge and private swap construction."""

__version__ = "0.1.0"
