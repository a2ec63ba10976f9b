"""Heuristic email spam score analyzer."""

__version__ = "0.1.0"
