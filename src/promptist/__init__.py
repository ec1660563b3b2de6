"""Promptist - reusable prompt templates, one keystroke away."""

__version__ = "0.1.0"
