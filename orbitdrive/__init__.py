"""Orbital physics, vehicles and networking for a multiplayer rocket game."""

__version__ = "0.1.0"