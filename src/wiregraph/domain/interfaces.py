from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence

from wiregraph.domain.enums import Lifecycle

if TYPE_CHECKING:
    from wiregraph.domain.models import Binding, BindingRule, ParameterDescriptor


class IBindingRegistry(ABC):
    """Abstract interface for the abstract-type to rule mapping."""

    @abstractmethod
    def bind(self, abstract_type: Any, rule: "BindingRule", lifecycle: Lifecycle = Lifecycle.TRANSIENT) -> None:
        """Register or overwrite the rule for ``abstract_type``.

        Args:
            abstract_type: The type callers will request.
            rule: How the type is satisfied.
            lifecycle: Instance reuse policy.
        """

    @abstractmethod
    def lookup(self, abstract_type: Any) -> Optional["Binding"]:
        """Return the binding for ``abstract_type``, or None when unbound."""

    @abstractmethod
    def __contains__(self, abstract_type: Any) -> bool:
        """Whether a binding exists for ``abstract_type``."""

    @abstractmethod
    def copy(self) -> "IBindingRegistry":
        """Return an independent registry holding the same bindings."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every binding."""


class ITypeDescriptorProvider(ABC):
    """Abstract interface for constructor introspection."""

    @abstractmethod
    def describe_constructor(self, concrete_type: Any) -> List["ParameterDescriptor"]:
        """Describe the constructor parameters of ``concrete_type`` in declared order.

        Raises:
            NotInstantiableError: If the type cannot be constructed.
        """


class IInstanceConstructor(ABC):
    """Abstract interface for invoking a constructor."""

    @abstractmethod
    def construct(
        self,
        concrete_type: Any,
        args: Sequence[Any],
        kwargs: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Create an instance of ``concrete_type``.

        Raises:
            ConstructionError: If the constructor raises.
        """


class ISingletonCache(ABC):
    """Abstract interface for the cross-resolution singleton cache."""

    @abstractmethod
    def get(self, key: Any) -> Any:
        """Return the cached instance for ``key``; raises KeyError when absent."""

    @abstractmethod
    def __contains__(self, key: Any) -> bool:
        """Whether an instance is cached for ``key``."""

    @abstractmethod
    def get_or_create(self, key: Any, factory: Callable[[], Any]) -> Any:
        """Return the cached instance for ``key``, creating it at most once."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every cached instance."""


class IResolver(ABC):
    """Abstract interface for dependency resolution."""

    @abstractmethod
    def resolve(self, requested_type: Any) -> Any:
        """Build a fully-wired instance of ``requested_type``.

        Raises:
            ResolutionError: If any part of the graph cannot be built.
        """
