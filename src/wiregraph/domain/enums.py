from enum import Enum


class Lifecycle(str, Enum):
    """Defines how often a binding produces a new instance.

    Attributes:
        TRANSIENT: New instance created on each resolution.
        SINGLETON: Single instance shared by every resolution of the same resolver.
    """

    TRANSIENT = "transient"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value


class ParameterKind(str, Enum):
    """Classification of a constructor parameter.

    Attributes:
        PRIMITIVE: Value-kind parameter; needs a literal binding or a default.
        RESOLVABLE: Class-typed parameter; resolved recursively.
    """

    PRIMITIVE = "primitive"
    RESOLVABLE = "resolvable"

    def __str__(self) -> str:
        return self.value


class RuleKind(str, Enum):
    """The three ways a binding can satisfy an abstract type."""

    CONCRETE_TYPE = "concrete_type"
    FACTORY = "factory"
    INSTANCE = "instance"

    def __str__(self) -> str:
        return self.value
