"""Feature modules with auto-discovery."""

import logging
from importlib import import_module
from pathlib import Path

from fastapi import APIRouter


logger = logging.getLogger(__name__)


def discover_modules() -> list[APIRouter]:
    """Auto-discover and return routers from all modules.

    This function scans the modules directory for subdirectories
    that ship a ``routes`` module exposing a ``router`` attribute.
    Package ``__init__`` files stay free of imports so modules can
    depend on each other's repositories without import cycles.

    Returns:
        List of FastAPI routers from discovered modules.
    """
    modules_dir = Path(__file__).parent
    routers: list[APIRouter] = []

    for path in sorted(modules_dir.iterdir()):
        if (
            path.is_dir()
            and not path.name.startswith("_")
            and (path / "routes.py").exists()
        ):
            module = import_module(f"assetflow.modules.{path.name}.routes")
            if hasattr(module, "router"):
                routers.append(module.router)
                logger.info(f"Loaded module: {path.name}")

    return routers
