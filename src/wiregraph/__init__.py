"""
wiregraph: Reflection-driven dependency resolver with constructor auto-wiring.

Public API exports for the wiregraph package.
"""

import logging

# Application exports
from wiregraph.application.resolver import ResolutionHandle, Resolver
from wiregraph.application.settings import ResolverSettings

# Domain exports
from wiregraph.domain.enums import Lifecycle
from wiregraph.domain.exceptions import (
    CircularDependencyError,
    ConstructionError,
    MaxDepthExceededError,
    NotInstantiableError,
    ResolutionError,
    UnresolvableDependencyError,
)
from wiregraph.domain.models import ConcreteType, Factory, Instance

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Resolver
    "Resolver",
    "ResolutionHandle",
    "ResolverSettings",
    # Rules
    "ConcreteType",
    "Factory",
    "Instance",
    # Enums
    "Lifecycle",
    # Exceptions
    "ResolutionError",
    "NotInstantiableError",
    "CircularDependencyError",
    "UnresolvableDependencyError",
    "ConstructionError",
    "MaxDepthExceededError",
]
