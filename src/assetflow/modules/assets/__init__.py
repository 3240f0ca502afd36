"""Asset inventory module."""
