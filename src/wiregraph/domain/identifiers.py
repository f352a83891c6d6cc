"""Type identifiers: canonical names and dotted-name lookup."""

import importlib
from typing import Any, Union

from wiregraph.domain.exceptions import NotInstantiableError

TypeIdentifier = Union[type, str]


def canonical_name(tp: Any) -> str:
    """Return the fully-qualified ``module.QualName`` of a type.

    Builtins are reported without the ``builtins.`` prefix. Non-class objects
    (typing constructs, for example) fall back to ``repr``.
    """
    qualname = getattr(tp, "__qualname__", None)
    if qualname is None:
        return repr(tp)
    module = getattr(tp, "__module__", None)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def load_type(name: str) -> Any:
    """Import the object named by a dotted path such as ``"myapp.services.UserService"``.

    The longest importable module prefix is imported; the remaining segments
    are looked up as attributes, which supports nested classes.

    Raises:
        NotInstantiableError: If no prefix is importable or an attribute is missing.
    """
    parts = name.split(".")
    for split_at in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split_at])
        try:
            target = importlib.import_module(module_name)
        except ImportError:
            continue
        try:
            for attribute in parts[split_at:]:
                target = getattr(target, attribute)
        except AttributeError as e:
            raise NotInstantiableError(name, f"'{module_name}' has no attribute path '{name}'") from e
        return target
    raise NotInstantiableError(name, "no importable module prefix")


def normalize(identifier: TypeIdentifier) -> Any:
    """Turn a dotted name into the type it names; types pass through unchanged."""
    if isinstance(identifier, str):
        return load_type(identifier)
    return identifier
