"""Donatello Gateway: chat, upload and mint relay in front of the Donatello backend."""

__version__ = "0.1.0"
