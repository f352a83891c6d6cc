"""
Application layer - Resolution engine and its collaborators.

This layer orchestrates domain objects. It depends only on the Domain layer.
"""

from .descriptor_provider import TypeDescriptorProvider
from .instance_constructor import InstanceConstructor
from .registry import BindingRegistry
from .resolver import ResolutionHandle, Resolver
from .settings import ResolverSettings
from .singleton_cache import SingletonCache

__all__ = [
    "Resolver",
    "ResolutionHandle",
    "BindingRegistry",
    "TypeDescriptorProvider",
    "InstanceConstructor",
    "SingletonCache",
    "ResolverSettings",
]
