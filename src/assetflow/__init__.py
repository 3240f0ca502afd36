"""AssetFlow: multi-tenant asset and ticket tracking with subscription billing."""

__version__ = "0.1.0"
