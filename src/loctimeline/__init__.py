"""Commit history timeline: line records, commits and cutoff-driven views."""

__version__ = "0.1.0"
