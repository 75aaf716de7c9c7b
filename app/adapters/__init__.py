"""Job board adapters.

Currently supported boards:
- Greenhouse: greenhouse.GreenhouseAdapter

Use the factory function to instantiate adapters:
    from app.adapters.factory import get_adapter
    adapter = get_adapter(source_config, advanced_config)
    postings = adapter.list_postings(source_config)
    detail = adapter.fetch_detail(source_config, postings[0].id)

Exception handling:
    from app.adapters.exceptions import AdapterError, AdapterHTTPError, AdapterTimeoutError, AdapterResponseError
"""

from .base import BaseAdapter
from .cache import ResponseCache
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .factory import get_adapter
from .greenhouse import GreenhouseAdapter

__all__ = [
    # Base and factory
    "BaseAdapter",
    "ResponseCache",
    "get_adapter",
    # Adapters
    "GreenhouseAdapter",
    # Exceptions
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
]
