"""
FastAPI integration module.

Provides helpers for resolving wiregraph object graphs inside FastAPI endpoints.
"""

from .integration import create_fastapi_dependency, inject_dependencies

__all__ = [
    "create_fastapi_dependency",
    "inject_dependencies",
]
