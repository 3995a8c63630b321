"""Tools for tracking and summarising changes to company policy documents."""

__version__ = "0.1.0"