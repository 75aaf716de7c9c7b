"""Factory function for instantiating board adapters."""

import logging
from typing import Optional

from app.config.models import AdvancedConfig, SourceConfig

from .base import BaseAdapter
from .cache import ResponseCache
from .exceptions import AdapterConfigurationError
from .greenhouse import GreenhouseAdapter

logger = logging.getLogger(__name__)

ADAPTER_MAP = {
    "greenhouse": GreenhouseAdapter,
}


def get_adapter(
    source_config: SourceConfig,
    advanced_config: AdvancedConfig,
    cache: Optional[ResponseCache] = None,
) -> BaseAdapter:
    """Instantiate the adapter for a source's board type.

    Args:
        source_config: Source configuration with board type and identifier
        advanced_config: Timeout, user-agent, max_jobs and API base settings
        cache: Response cache to share across adapters; one is created from
            advanced_config.cache_ttl_seconds when omitted

    Returns:
        Instantiated adapter for the board type

    Raises:
        AdapterConfigurationError: If the board type is not supported or config is invalid

    Example:
        >>> source = SourceConfig(name="Stripe", identifier="stripe")
        >>> adapter = get_adapter(source, AdvancedConfig())
        >>> postings = adapter.list_postings(source)
    """
    board_type = str(getattr(source_config.type, "value", source_config.type)).lower()
    adapter_class = ADAPTER_MAP.get(board_type)

    if not adapter_class:
        supported_types = ", ".join(sorted(ADAPTER_MAP))
        raise AdapterConfigurationError(
            f"Unknown board type: {board_type}. Supported types: {supported_types}"
        )

    logger.debug(
        "Creating adapter instance",
        extra={
            "board_type": board_type,
            "source": source_config.identifier,
            "adapter_class": adapter_class.__name__,
        },
    )

    if cache is None:
        cache = ResponseCache(ttl_seconds=advanced_config.cache_ttl_seconds)

    try:
        return adapter_class(
            timeout=advanced_config.http_request_timeout,
            user_agent=advanced_config.user_agent,
            max_jobs=advanced_config.max_jobs_per_source,
            cache=cache,
            api_base_url=advanced_config.api_base_url,
        )
    except AdapterConfigurationError:
        raise
    except Exception as e:
        raise AdapterConfigurationError(
            f"Failed to create {board_type} adapter: {e}"
        ) from e
