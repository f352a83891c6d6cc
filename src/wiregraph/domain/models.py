from typing import Any, Callable, ClassVar, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from wiregraph.domain.enums import Lifecycle, ParameterKind, RuleKind
from wiregraph.domain.exceptions import CircularDependencyError, MaxDepthExceededError
from wiregraph.domain.interfaces import ISingletonCache


class BindingRule(BaseModel):
    """Base class for the ways a binding can satisfy an abstract type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ClassVar[RuleKind]


class ConcreteType(BindingRule):
    """Construct ``target`` by auto-wiring its constructor.

    Attributes:
        target: The class to construct in place of the abstract type.
    """

    kind: ClassVar[RuleKind] = RuleKind.CONCRETE_TYPE

    target: Type = Field(..., description="The concrete class to construct.")


class Factory(BindingRule):
    """Delegate construction to a callable.

    The callable receives a resolution handle and is responsible for acquiring
    its own dependencies through it.

    Attributes:
        func: Callable taking the resolution handle and returning the instance.
    """

    kind: ClassVar[RuleKind] = RuleKind.FACTORY

    func: Callable[[Any], Any] = Field(..., description="Factory invoked with the resolution handle.")


class Instance(BindingRule):
    """Always resolve to a pre-built value.

    Attributes:
        value: The literal value returned for the abstract type.
    """

    kind: ClassVar[RuleKind] = RuleKind.INSTANCE

    value: Any = Field(..., description="The literal value to return.")


class Binding(BaseModel):
    """Value object mapping an abstract type to its resolution rule.

    Attributes:
        abstract_type: The type being requested.
        rule: How the type is satisfied.
        lifecycle: Whether instances are reused.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    abstract_type: Any = Field(..., description="The abstract type this binding satisfies.")
    rule: BindingRule = Field(..., description="The rule used to satisfy the abstract type.")
    lifecycle: Lifecycle = Field(default=Lifecycle.TRANSIENT, description="Instance reuse policy.")


class ParameterDescriptor(BaseModel):
    """Describes one constructor parameter.

    Attributes:
        name: Parameter name.
        declared_type: The evaluated type hint, or None when unannotated.
        kind: Whether the resolver may auto-wire this parameter.
        has_default: Whether the parameter declares a default.
        default_value: The default, meaningful only when ``has_default`` is True.
        keyword_only: Whether the parameter must be passed by keyword.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    declared_type: Any = None
    kind: ParameterKind
    has_default: bool = False
    default_value: Any = None
    keyword_only: bool = False


class ResolutionContext(BaseModel):
    """State owned by a single top-level resolution.

    Holds the stack of types currently being resolved, used for cycle
    detection, and a reference to the resolver's singleton cache.

    Attributes:
        path_stack: Types currently being resolved, outermost first.
        singleton_cache: Cache shared with every resolution of the same resolver.
        max_depth: Optional limit on the length of ``path_stack``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    path_stack: List[Any] = Field(
        default_factory=list,
        description="Stack of types currently being resolved.",
    )
    singleton_cache: ISingletonCache = Field(..., description="Cache of singleton instances.")
    max_depth: Optional[int] = Field(default=None, ge=1, description="Maximum resolution depth.")

    @property
    def depth(self) -> int:
        return len(self.path_stack)

    @property
    def path(self) -> List[Any]:
        return list(self.path_stack)

    def push(self, dependency_type: Any) -> None:
        """Add a type to the resolution stack.

        Args:
            dependency_type: The type being resolved.

        Raises:
            CircularDependencyError: If the type is already in the stack.
            MaxDepthExceededError: If the stack would grow past ``max_depth``.
        """
        if dependency_type in self.path_stack:
            cycle = self.path_stack[self.path_stack.index(dependency_type) :] + [dependency_type]
            raise CircularDependencyError(cycle)
        if self.max_depth is not None and len(self.path_stack) >= self.max_depth:
            raise MaxDepthExceededError(self.path_stack + [dependency_type], self.max_depth)
        self.path_stack.append(dependency_type)

    def pop(self) -> None:
        """Remove the most recent type from the stack."""
        if self.path_stack:
            self.path_stack.pop()
