"""Textual user interface for Promptist."""
