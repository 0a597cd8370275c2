"""Jobboard: companies and their jobs over an HTTP API."""

__version__ = "1.0.0"
