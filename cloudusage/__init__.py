"""Normalization of cloud billing usage rows into canonical compute usage."""

__version__ = "0.1.0"
