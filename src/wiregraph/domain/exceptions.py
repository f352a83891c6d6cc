from typing import Any, List, Optional, Type


def _display_name(cls: Any) -> str:
    return getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None) or repr(cls)


class ResolutionError(Exception):
    """Base exception for errors raised while resolving an object graph."""


class NotInstantiableError(ResolutionError):
    """Raised when the target type cannot be constructed.

    This occurs when:
    - The target is abstract, a Protocol, or not a class at all.
    - Constructor type hints reference names that cannot be evaluated.
    - A dotted type name cannot be imported.

    Attributes:
        cls: The type (or type name) that could not be constructed.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Any, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.reason = reason
        message = f"Type {_display_name(cls)} is not instantiable"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class CircularDependencyError(ResolutionError):
    """Raised when a type transitively depends on itself.

    Attributes:
        path: Types forming the cycle, first and last entries are the same type.
    """

    def __init__(self, path: List[Type]) -> None:
        self.path = path
        message = f"Circular dependency detected: {' -> '.join(_display_name(cls) for cls in path)}"
        super().__init__(message)


class UnresolvableDependencyError(ResolutionError):
    """Raised when a primitive parameter has neither a literal binding nor a default.

    Attributes:
        parameter_name: Name of the constructor parameter.
        owning_type: The type whose constructor declares the parameter.
    """

    def __init__(self, parameter_name: str, owning_type: Type) -> None:
        self.parameter_name = parameter_name
        self.owning_type = owning_type
        super().__init__(
            f"Cannot resolve parameter '{parameter_name}' of {_display_name(owning_type)}: "
            "no binding and no default value"
        )


class ConstructionError(ResolutionError):
    """Raised when a constructor or factory itself raises.

    The original exception is available as ``cause`` and as ``__cause__``.

    Attributes:
        cls: The type being constructed.
        cause: The exception raised by the underlying construction.
    """

    def __init__(self, cls: Any, cause: BaseException) -> None:
        self.cls = cls
        self.cause = cause
        super().__init__(f"Failed to construct {_display_name(cls)}: {type(cause).__name__}: {cause}")


class MaxDepthExceededError(ResolutionError):
    """Raised when the resolution path grows deeper than the configured limit.

    Attributes:
        path: The resolution path at the moment the limit was hit.
        max_depth: The configured limit.
    """

    def __init__(self, path: List[Type], max_depth: int) -> None:
        self.path = path
        self.max_depth = max_depth
        super().__init__(
            f"Resolution depth exceeded {max_depth}: {' -> '.join(_display_name(cls) for cls in path)}"
        )
