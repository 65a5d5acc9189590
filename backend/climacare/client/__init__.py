from .api import ApiClient, ApiError
from .cache import QueryCache
from .data import DataStore

__all__ = ["ApiClient", "ApiError", "QueryCache", "DataStore"]
