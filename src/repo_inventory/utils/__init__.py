"""Utility functions for repo-inventory."""
