"""Bulk triage, approval and merging of GitHub pull requests."""

__version__ = "0.1.0"
