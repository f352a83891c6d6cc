from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["ResolverSettings"]


class ResolverSettings(BaseSettings):
    """Resolver tuning loaded from ``WIREGRAPH_*`` environment variables.

    Attributes:
        max_depth: Longest resolution path allowed before giving up.
        cache_descriptors: Reuse constructor descriptions across resolutions.
        thread_safe_singletons: Guard first construction of each singleton with a lock.
    """

    max_depth: int = Field(128, ge=1, description="Maximum resolution depth.")
    cache_descriptors: bool = Field(True, description="Cache constructor descriptors per type.")
    thread_safe_singletons: bool = Field(True, description="Lock singleton construction per key.")

    model_config = SettingsConfigDict(env_prefix="WIREGRAPH_", case_sensitive=False, extra="ignore")
