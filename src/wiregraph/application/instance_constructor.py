import logging
from typing import Any, Dict, Optional, Sequence

from wiregraph.domain import ConstructionError, IInstanceConstructor, ResolutionError, canonical_name

logger = logging.getLogger(__name__)


class InstanceConstructor(IInstanceConstructor):
    """Invokes a class with already-resolved arguments."""

    def construct(
        self,
        concrete_type: Any,
        args: Sequence[Any],
        kwargs: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Create an instance of ``concrete_type``.

        Args:
            concrete_type: The class to call.
            args: Positional arguments in constructor-declaration order.
            kwargs: Keyword-only arguments.

        Returns:
            The new instance.

        Raises:
            ConstructionError: If the constructor body raises. Resolution errors
                raised from inside the constructor propagate unchanged.
        """
        try:
            instance = concrete_type(*args, **(kwargs or {}))
        except ResolutionError:
            raise
        except Exception as e:
            raise ConstructionError(concrete_type, e) from e

        logger.debug("Constructed %s", canonical_name(concrete_type))
        return instance
