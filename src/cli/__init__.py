"""Productive command-line interface."""
