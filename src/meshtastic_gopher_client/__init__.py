"""Meshtastic Gopher Client - browse Gopherspace over mesh radio."""

__version__ = "0.1.0"
