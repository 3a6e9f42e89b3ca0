"""Umbrella check: will you need an umbrella in the next 12 hours?"""

__version__ = "0.1.0"
