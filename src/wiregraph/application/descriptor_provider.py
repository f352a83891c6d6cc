"""Application layer - Constructor introspection."""

import inspect
import logging
import sys
import threading
import types
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from wiregraph.domain import (
    ITypeDescriptorProvider,
    NotInstantiableError,
    ParameterDescriptor,
    ParameterKind,
    canonical_name,
)

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _unwrap_optional(annotation: Any) -> Any:
    """Return ``X`` for ``Optional[X]`` / ``X | None``; anything else unchanged."""
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _is_value_type(declared: type) -> bool:
    """Builtins, enums and classes from the standard library are never auto-wired."""
    if issubclass(declared, Enum):
        return True
    root_module = declared.__module__.split(".")[0]
    return root_module == "builtins" or root_module in sys.stdlib_module_names


def classify(annotation: Any) -> Tuple[Any, ParameterKind]:
    """Decide whether a parameter annotation is auto-wirable.

    Resolvable parameters are annotated with a user class. Missing annotations,
    ``Any``, builtins, enums, standard library classes such as ``Path`` or
    ``datetime`` and non-class typing constructs are primitive.

    Returns:
        The declared type (``Optional`` unwrapped, None when unannotated) and its kind.
    """
    if annotation is inspect.Parameter.empty:
        return None, ParameterKind.PRIMITIVE

    declared = _unwrap_optional(annotation)
    if (
        declared is not Any
        and get_origin(declared) is None
        and isinstance(declared, type)
        and not _is_value_type(declared)
    ):
        return declared, ParameterKind.RESOLVABLE
    return declared, ParameterKind.PRIMITIVE


class TypeDescriptorProvider(ITypeDescriptorProvider):
    """Describes constructors using ``inspect.signature`` and type hints.

    Attributes:
        _cache_enabled: Whether descriptions are memoized per type.
        _cache: Memoized descriptions.
    """

    def __init__(self, cache: bool = True) -> None:
        self._cache_enabled = cache
        self._cache: Dict[Any, List[ParameterDescriptor]] = {}
        self._lock = threading.Lock()

    def describe_constructor(self, concrete_type: Any) -> List[ParameterDescriptor]:
        """Describe the constructor parameters of ``concrete_type`` in declared order.

        Args:
            concrete_type: The class to inspect.

        Returns:
            One descriptor per positional or keyword parameter; ``self``,
            ``*args`` and ``**kwargs`` are omitted.

        Raises:
            NotInstantiableError: If the type is abstract, a Protocol, not a class,
                or its type hints cannot be evaluated.

        Example:
            >>> class PaymentService:
            ...     def __init__(self, logger: Logger, retries: int = 3):
            ...         ...
            >>> [d.name for d in provider.describe_constructor(PaymentService)]
            ['logger', 'retries']
        """
        if self._cache_enabled:
            cached = self._cache.get(concrete_type)
            if cached is not None:
                return list(cached)

        descriptors = self._describe(concrete_type)

        if self._cache_enabled:
            with self._lock:
                self._cache[concrete_type] = descriptors
        return list(descriptors)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _describe(self, concrete_type: Any) -> List[ParameterDescriptor]:
        self._check_instantiable(concrete_type)

        init_callable = self._constructor_callable(concrete_type)
        if init_callable is None:
            return []

        try:
            signature = inspect.signature(concrete_type)
        except NameError as e:
            raise NotInstantiableError(concrete_type, f"Cannot evaluate constructor type hints: {e}") from e
        except (TypeError, ValueError) as e:
            raise NotInstantiableError(concrete_type, f"Constructor signature unavailable: {e}") from e

        # String annotations come from forward references or postponed evaluation.
        type_hints: Dict[str, Any] = {}
        if any(isinstance(param.annotation, str) for param in signature.parameters.values()):
            try:
                type_hints = get_type_hints(init_callable)
            except NameError as e:
                raise NotInstantiableError(concrete_type, f"Cannot evaluate constructor type hints: {e}") from e
            except TypeError:
                pass

        descriptors = []
        for param_name, param in signature.parameters.items():
            if param.kind in _SKIPPED_KINDS:
                continue

            annotation = type_hints.get(param_name, param.annotation)
            if isinstance(annotation, str):
                raise NotInstantiableError(
                    concrete_type,
                    f"Parameter '{param_name}' has an unresolved forward reference '{annotation}'",
                )
            declared_type, kind = classify(annotation)
            has_default = param.default is not inspect.Parameter.empty

            descriptors.append(
                ParameterDescriptor(
                    name=param_name,
                    declared_type=declared_type,
                    kind=kind,
                    has_default=has_default,
                    default_value=param.default if has_default else None,
                    keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
                )
            )

        logger.debug(
            "Described %s: %s",
            canonical_name(concrete_type),
            ", ".join(f"{d.name}:{d.kind}" for d in descriptors) or "<no parameters>",
        )
        return descriptors

    @staticmethod
    def _check_instantiable(concrete_type: Any) -> None:
        if not isinstance(concrete_type, type) or get_origin(concrete_type) is not None:
            raise NotInstantiableError(concrete_type, "Not a class")
        if getattr(concrete_type, "_is_protocol", False):
            raise NotInstantiableError(concrete_type, "Protocol classes cannot be instantiated")
        if inspect.isabstract(concrete_type):
            missing = ", ".join(sorted(getattr(concrete_type, "__abstractmethods__", ())))
            raise NotInstantiableError(concrete_type, f"Abstract class with unimplemented methods: {missing}")

    @staticmethod
    def _constructor_callable(concrete_type: type) -> Optional[Any]:
        """Return the user-defined ``__init__`` or ``__new__``, or None for default construction."""
        if concrete_type.__init__ is not object.__init__:
            return concrete_type.__init__
        if concrete_type.__new__ is not object.__new__:
            return concrete_type.__new__
        return None
