"""
Testing utilities module.

Provides helpers for testing applications that use wiregraph.
"""

from .utilities import TestResolver, create_mock_resolver

__all__ = [
    "TestResolver",
    "create_mock_resolver",
]
