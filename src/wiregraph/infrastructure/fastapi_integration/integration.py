import functools
import inspect
from typing import Any, Callable, Dict, Type, TypeVar

from fastapi import Depends, params

from wiregraph.domain import IResolver

T = TypeVar("T")


def create_fastapi_dependency(resolver: IResolver, dependency_type: Type[T]) -> Callable[[], T]:
    """Create a FastAPI Depends() callable that resolves from the resolver.

    Each call runs a full resolution, so the lifecycle of the returned instance
    follows the resolver's bindings: singletons are shared across requests,
    everything else is built fresh per request.

    Args:
        resolver: The resolver to build instances with.
        dependency_type: The type to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> resolver = Resolver()
        >>> resolver.bind(UserRepository, SqlUserRepository, Lifecycle.SINGLETON)
        >>>
        >>> get_user_service = create_fastapi_dependency(resolver, UserService)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_user_service)):
        ...     return await service.get_all()
    """

    def dependency() -> T:
        """Resolve the dependency from the resolver."""
        return resolver.resolve(dependency_type)

    return dependency


def inject_dependencies(resolver: IResolver, *dependency_types: Type[Any]) -> Callable:
    """Decorator that injects resolved dependencies into an endpoint function.

    The leading parameters of the decorated function, one per entry in
    ``dependency_types``, are filled from the resolver. FastAPI sees them as
    keyword-only ``Depends()`` parameters; direct callers may pass them by
    keyword to bypass resolution.

    Args:
        resolver: The resolver to build instances with.
        *dependency_types: Types to resolve, matched to the leading parameters in order.

    Returns:
        A decorator function.

    Example:
        >>> @app.get("/orders/{order_id}")
        >>> @inject_dependencies(resolver, OrderController)
        >>> async def get_order(controller: OrderController, order_id: int):
        ...     return controller.find(order_id)
    """

    def decorator(func: Callable) -> Callable:
        """Wrap the function with dependency injection logic."""
        signature = inspect.signature(func)
        parameters = list(signature.parameters.values())
        injected: Dict[str, Type[Any]] = {
            param.name: dep_type for param, dep_type in zip(parameters, dependency_types)
        }

        # Injected parameters become keyword-only so that their Depends() defaults
        # may follow the remaining required parameters.
        remaining = [param for param in parameters if param.name not in injected]
        var_keyword = [param for param in remaining if param.kind is inspect.Parameter.VAR_KEYWORD]
        remaining = [param for param in remaining if param.kind is not inspect.Parameter.VAR_KEYWORD]
        keyword_only = [
            signature.parameters[name].replace(
                kind=inspect.Parameter.KEYWORD_ONLY,
                default=Depends(create_fastapi_dependency(resolver, dep_type)),
            )
            for name, dep_type in injected.items()
        ]

        def fill(kwargs: Dict[str, Any]) -> Dict[str, Any]:
            for name, dep_type in injected.items():
                if name not in kwargs or isinstance(kwargs[name], params.Depends):
                    kwargs[name] = resolver.resolve(dep_type)
            return kwargs

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                """Resolve dependencies and await the original function."""
                return await func(*args, **fill(kwargs))

        else:

            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                """Resolve dependencies and call the original function."""
                return func(*args, **fill(kwargs))

        # FastAPI must see the Depends() signature, not the wrapped function's.
        del wrapper.__wrapped__
        wrapper.__signature__ = signature.replace(parameters=remaining + keyword_only + var_keyword)
        return wrapper

    return decorator
