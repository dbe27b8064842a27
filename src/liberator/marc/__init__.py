"""MARC record model and decoding."""
