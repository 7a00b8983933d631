"""Tickerdle: a daily company-guessing puzzle."""

__version__ = "0.1.0"
