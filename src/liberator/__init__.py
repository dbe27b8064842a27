"""Voyager liberator: MARC record aggregation and circulation availability."""

__version__ = "0.3.0"
