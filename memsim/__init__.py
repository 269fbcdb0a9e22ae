"""Cycle-accurate simulation of a DRAM and write-back, set-associative cache hierarchy."""

__version__ = "0.1.0"