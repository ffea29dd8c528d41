"""Crypto tax backend: portfolio, overview and upload APIs."""

__version__ = "0.1.0"
