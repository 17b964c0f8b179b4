"""Raycasting maze explorer that parses, validates and plays .cub scene files."""

__version__ = "0.1.0"