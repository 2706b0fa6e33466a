"""Tokamak plasma simulation building blocks: fields, particle push, fusion cross sections, grid and diagnostics."""

__version__ = "0.1.0"