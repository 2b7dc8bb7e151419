"""Read, check, find and concatenate simple PNG images, and fetch image fragments over HTTP."""

__version__ = "0.1.0"