"""API layer - routers and shared dependencies."""

from assetflow.api.router import api_router


__all__ = ["api_router"]
