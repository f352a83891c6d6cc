import logging
import threading
from typing import Any, Callable, Dict, Optional

from wiregraph.domain import (
    Binding,
    BindingRule,
    ConcreteType,
    Factory,
    IBindingRegistry,
    Instance,
    Lifecycle,
    TypeIdentifier,
    canonical_name,
    normalize,
)

logger = logging.getLogger(__name__)


class BindingRegistry(IBindingRegistry):
    """Mapping from abstract type to the rule that satisfies it.

    At most one binding exists per abstract type; registering again replaces
    the previous binding. Writes are serialized, reads are lock-free.

    Attributes:
        _bindings: Dictionary mapping abstract types to their bindings.
        _lock: Serializes writers.
    """

    def __init__(self) -> None:
        self._bindings: Dict[Any, Binding] = {}
        self._lock = threading.Lock()

    def bind(
        self,
        abstract_type: TypeIdentifier,
        rule: Any,
        lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    ) -> None:
        """Register or overwrite the rule for ``abstract_type``.

        Args:
            abstract_type: The type (or dotted type name) callers will request.
            rule: A ``BindingRule``, or a bare class which is treated as ``ConcreteType``.
            lifecycle: Instance reuse policy.

        Example:
            >>> registry.bind(PaymentGateway, ConcreteType(target=StripeGateway), Lifecycle.SINGLETON)
            >>> registry.bind(Clock, StubClock)
        """
        abstract_type = normalize(abstract_type)
        if not isinstance(rule, BindingRule):
            rule = ConcreteType(target=normalize(rule))
        binding = Binding(abstract_type=abstract_type, rule=rule, lifecycle=lifecycle)

        with self._lock:
            replaced = abstract_type in self._bindings
            self._bindings[abstract_type] = binding

        logger.debug(
            "%s %s -> %s (%s)",
            "Rebound" if replaced else "Bound",
            canonical_name(abstract_type),
            rule.kind,
            lifecycle,
        )

    def bind_type(
        self,
        abstract_type: TypeIdentifier,
        concrete_type: TypeIdentifier,
        lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    ) -> None:
        """Bind ``abstract_type`` to a concrete class that will be auto-wired."""
        self.bind(abstract_type, ConcreteType(target=normalize(concrete_type)), lifecycle)

    def bind_factory(
        self,
        abstract_type: TypeIdentifier,
        func: Callable[[Any], Any],
        lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    ) -> None:
        """Bind ``abstract_type`` to a factory receiving the resolution handle."""
        self.bind(abstract_type, Factory(func=func), lifecycle)

    def bind_instance(self, abstract_type: TypeIdentifier, value: Any) -> None:
        """Bind ``abstract_type`` to a literal value."""
        self.bind(abstract_type, Instance(value=value))

    def bind_singletons(self, factories: Dict[TypeIdentifier, Callable[[Any], Any]]) -> None:
        """Register several singleton factories at once.

        Example:
            >>> registry.bind_singletons({
            ...     DatabaseConfig: lambda r: DatabaseConfig.from_env(),
            ...     DatabaseConnection: lambda r: DatabaseConnection(r.resolve(DatabaseConfig)),
            ... })
        """
        for abstract_type, func in factories.items():
            self.bind_factory(abstract_type, func, Lifecycle.SINGLETON)

    def bind_transients(self, factories: Dict[TypeIdentifier, Callable[[Any], Any]]) -> None:
        """Register several transient factories at once."""
        for abstract_type, func in factories.items():
            self.bind_factory(abstract_type, func, Lifecycle.TRANSIENT)

    def lookup(self, abstract_type: Any) -> Optional[Binding]:
        """Return the binding for ``abstract_type``, or None for self-binding."""
        return self._bindings.get(abstract_type)

    def unbind(self, abstract_type: TypeIdentifier) -> None:
        """Remove the binding for ``abstract_type`` if present."""
        abstract_type = normalize(abstract_type)
        with self._lock:
            self._bindings.pop(abstract_type, None)

    def copy(self) -> "BindingRegistry":
        """Return an independent registry holding the same bindings."""
        clone = BindingRegistry()
        with self._lock:
            clone._bindings = dict(self._bindings)
        return clone

    def clear(self) -> None:
        """Remove every binding."""
        with self._lock:
            self._bindings.clear()

    def __contains__(self, abstract_type: Any) -> bool:
        return abstract_type in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
