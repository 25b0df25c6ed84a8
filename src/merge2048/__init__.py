"""Sliding-tile merge puzzle ("2048") rule engine with pygame and Gymnasium front ends."""

__version__ = "0.1.0"
