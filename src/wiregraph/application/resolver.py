import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from wiregraph.application.descriptor_provider import TypeDescriptorProvider
from wiregraph.application.instance_constructor import InstanceConstructor
from wiregraph.application.registry import BindingRegistry
from wiregraph.application.settings import ResolverSettings
from wiregraph.application.singleton_cache import SingletonCache
from wiregraph.domain import (
    Binding,
    CircularDependencyError,
    ConcreteType,
    ConstructionError,
    Factory,
    IBindingRegistry,
    IInstanceConstructor,
    Instance,
    IResolver,
    ISingletonCache,
    ITypeDescriptorProvider,
    Lifecycle,
    ParameterDescriptor,
    ParameterKind,
    ResolutionContext,
    ResolutionError,
    RuleKind,
    TypeIdentifier,
    UnresolvableDependencyError,
    canonical_name,
    normalize,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ResolutionHandle:
    """Handle passed to factories so they can resolve their own dependencies.

    Resolutions made through the handle share the caller's resolution context,
    so a factory that asks for a type already being built is reported as a cycle.
    """

    def __init__(self, resolver: "Resolver", context: ResolutionContext) -> None:
        self.resolver = resolver
        self._context = context

    @property
    def path(self) -> List[Any]:
        """Types currently being resolved, outermost first."""
        return self._context.path

    def resolve(self, requested_type: Type[T]) -> T:
        return self.resolver._resolve(normalize(requested_type), self._context)


class Resolver(IResolver):
    """Builds fully-wired object graphs from constructor type hints.

    Explicit bindings decide how abstract types are satisfied; anything unbound
    is constructed directly by auto-wiring its constructor.

    Attributes:
        _registry: Bindings consulted before auto-wiring.
        _descriptor_provider: Constructor introspection.
        _instance_constructor: Invokes constructors with resolved arguments.
        _singleton_cache: Instances of singleton bindings, shared across resolutions.
        _settings: Depth limit and caching switches.

    Example:
        >>> resolver = Resolver()
        >>> resolver.bind(PaymentGateway, StripeGateway, Lifecycle.SINGLETON)
        >>> controller = resolver.resolve(OrderController)
    """

    def __init__(
        self,
        registry: Optional[IBindingRegistry] = None,
        descriptor_provider: Optional[ITypeDescriptorProvider] = None,
        instance_constructor: Optional[IInstanceConstructor] = None,
        singleton_cache: Optional[ISingletonCache] = None,
        settings: Optional[ResolverSettings] = None,
    ) -> None:
        self._settings = settings if settings is not None else ResolverSettings()
        self._registry: IBindingRegistry = registry if registry is not None else BindingRegistry()
        self._descriptor_provider: ITypeDescriptorProvider = (
            descriptor_provider
            if descriptor_provider is not None
            else TypeDescriptorProvider(cache=self._settings.cache_descriptors)
        )
        self._instance_constructor: IInstanceConstructor = (
            instance_constructor if instance_constructor is not None else InstanceConstructor()
        )
        self._singleton_cache: ISingletonCache = (
            singleton_cache
            if singleton_cache is not None
            else SingletonCache(thread_safe=self._settings.thread_safe_singletons)
        )

    @property
    def registry(self) -> IBindingRegistry:
        return self._registry

    @property
    def settings(self) -> ResolverSettings:
        return self._settings

    # Registration

    def bind(self, abstract_type: TypeIdentifier, rule: Any, lifecycle: Lifecycle = Lifecycle.TRANSIENT) -> None:
        """Register or overwrite the rule for ``abstract_type``.

        Bindings are meant to be set up before the first ``resolve``.

        Args:
            abstract_type: The type (or dotted type name) callers will request.
            rule: ``ConcreteType``, ``Factory`` or ``Instance``; a bare class means ``ConcreteType``.
            lifecycle: Instance reuse policy, transient by default.
        """
        self._registry.bind(abstract_type, rule, lifecycle)

    def bind_type(
        self,
        abstract_type: TypeIdentifier,
        concrete_type: TypeIdentifier,
        lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    ) -> None:
        self._registry.bind(abstract_type, ConcreteType(target=normalize(concrete_type)), lifecycle)

    def bind_factory(
        self,
        abstract_type: TypeIdentifier,
        func: Callable[[ResolutionHandle], Any],
        lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    ) -> None:
        self._registry.bind(abstract_type, Factory(func=func), lifecycle)

    def bind_instance(self, abstract_type: TypeIdentifier, value: Any) -> None:
        self._registry.bind(abstract_type, Instance(value=value))

    def bind_singletons(self, factories: Dict[TypeIdentifier, Callable[[ResolutionHandle], Any]]) -> None:
        for abstract_type, func in factories.items():
            self.bind_factory(abstract_type, func, Lifecycle.SINGLETON)

    def bind_transients(self, factories: Dict[TypeIdentifier, Callable[[ResolutionHandle], Any]]) -> None:
        for abstract_type, func in factories.items():
            self.bind_factory(abstract_type, func, Lifecycle.TRANSIENT)

    # Resolution

    def resolve(self, requested_type: Type[T]) -> T:
        """Build a fully-wired instance of ``requested_type``.

        Each call runs in a fresh resolution context; only singleton instances
        survive between calls.

        Args:
            requested_type: The type, or its dotted name, to build.

        Returns:
            The root of the constructed object graph.

        Raises:
            NotInstantiableError: If a type in the graph cannot be constructed.
            CircularDependencyError: If a type transitively depends on itself.
            UnresolvableDependencyError: If a primitive parameter has no binding and no default.
            ConstructionError: If a constructor or factory raises.
            MaxDepthExceededError: If the graph is deeper than ``settings.max_depth``.
        """
        requested_type = normalize(requested_type)
        context = ResolutionContext(
            singleton_cache=self._singleton_cache,
            max_depth=self._settings.max_depth,
        )
        logger.debug("Resolving %s", canonical_name(requested_type))
        return self._resolve(requested_type, context)

    def clear_singletons(self) -> None:
        """Drop every cached singleton instance."""
        self._singleton_cache.clear()

    def _resolve(self, requested_type: Any, context: ResolutionContext) -> Any:
        if requested_type in context.path_stack:
            cycle = context.path_stack[context.path_stack.index(requested_type) :] + [requested_type]
            raise CircularDependencyError(cycle)

        binding = self._registry.lookup(requested_type)

        if binding is None:
            concrete_type, lifecycle = requested_type, Lifecycle.TRANSIENT
        elif binding.rule.kind is RuleKind.INSTANCE:
            return binding.rule.value
        elif binding.rule.kind is RuleKind.FACTORY:
            return self._invoke_factory(requested_type, binding, context)
        else:
            concrete_type, lifecycle = binding.rule.target, binding.lifecycle

        singleton = lifecycle is Lifecycle.SINGLETON
        if singleton and concrete_type in context.singleton_cache:
            logger.debug("Singleton cache hit for %s", canonical_name(concrete_type))
            return context.singleton_cache.get(concrete_type)

        context.push(requested_type)
        try:
            if singleton:
                return context.singleton_cache.get_or_create(
                    concrete_type,
                    lambda: self._build(concrete_type, context),
                )
            return self._build(concrete_type, context)
        finally:
            context.pop()

    def _invoke_factory(self, requested_type: Any, binding: Binding, context: ResolutionContext) -> Any:
        singleton = binding.lifecycle is Lifecycle.SINGLETON
        # Factory results must never collide with auto-wired singletons of the same class.
        cache_key = (RuleKind.FACTORY, requested_type)
        if singleton and cache_key in context.singleton_cache:
            logger.debug("Singleton cache hit for factory of %s", canonical_name(requested_type))
            return context.singleton_cache.get(cache_key)

        def call_factory() -> Any:
            try:
                instance = binding.rule.func(ResolutionHandle(self, context))
            except ResolutionError:
                raise
            except Exception as e:
                raise ConstructionError(requested_type, e) from e
            logger.debug("Factory produced %s", canonical_name(requested_type))
            return instance

        context.push(requested_type)
        try:
            if singleton:
                return context.singleton_cache.get_or_create(cache_key, call_factory)
            return call_factory()
        finally:
            context.pop()

    def _build(self, concrete_type: Any, context: ResolutionContext) -> Any:
        descriptors = self._descriptor_provider.describe_constructor(concrete_type)

        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for descriptor in descriptors:
            value = self._resolve_parameter(descriptor, concrete_type, context)
            if descriptor.keyword_only:
                kwargs[descriptor.name] = value
            else:
                args.append(value)

        return self._instance_constructor.construct(concrete_type, args, kwargs)

    def _resolve_parameter(
        self,
        descriptor: ParameterDescriptor,
        owning_type: Any,
        context: ResolutionContext,
    ) -> Any:
        if descriptor.kind is ParameterKind.RESOLVABLE:
            return self._resolve(descriptor.declared_type, context)

        # Primitives are only satisfied by an explicit binding or their default.
        if descriptor.declared_type is not None and descriptor.declared_type in self._registry:
            return self._resolve(descriptor.declared_type, context)
        if descriptor.has_default:
            return descriptor.default_value
        raise UnresolvableDependencyError(descriptor.name, owning_type)
