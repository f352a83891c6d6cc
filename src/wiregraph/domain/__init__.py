"""
Domain layer - Core models, errors and contracts of the resolver.

This layer has no dependencies on other layers.
"""

from .enums import Lifecycle, ParameterKind, RuleKind
from .exceptions import (
    CircularDependencyError,
    ConstructionError,
    MaxDepthExceededError,
    NotInstantiableError,
    ResolutionError,
    UnresolvableDependencyError,
)
from .identifiers import TypeIdentifier, canonical_name, load_type, normalize
from .interfaces import (
    IBindingRegistry,
    IInstanceConstructor,
    IResolver,
    ISingletonCache,
    ITypeDescriptorProvider,
)
from .models import (
    Binding,
    BindingRule,
    ConcreteType,
    Factory,
    Instance,
    ParameterDescriptor,
    ResolutionContext,
)

__all__ = [
    # Enums
    "Lifecycle",
    "ParameterKind",
    "RuleKind",
    # Exceptions
    "ResolutionError",
    "NotInstantiableError",
    "CircularDependencyError",
    "UnresolvableDependencyError",
    "ConstructionError",
    "MaxDepthExceededError",
    # Identifiers
    "TypeIdentifier",
    "canonical_name",
    "load_type",
    "normalize",
    # Interfaces
    "IBindingRegistry",
    "ITypeDescriptorProvider",
    "IInstanceConstructor",
    "ISingletonCache",
    "IResolver",
    # Models
    "Binding",
    "BindingRule",
    "ConcreteType",
    "Factory",
    "Instance",
    "ParameterDescriptor",
    "ResolutionContext",
]
