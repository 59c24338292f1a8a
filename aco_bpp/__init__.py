"""Ant Colony Optimization for balanced bin packing (BPP1 / BPP2)."""

__version__ = "0.1.0"
