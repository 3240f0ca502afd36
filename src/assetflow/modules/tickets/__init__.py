"""Failure ticket module."""
