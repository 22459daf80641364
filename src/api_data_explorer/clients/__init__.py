"""Async clients for the two public REST services."""

from .base import ApiClient, translate_error
from .dummyjson import DummyJsonClient
from .jsonplaceholder import JsonPlaceholderClient

__all__ = [
    "ApiClient",
    "DummyJsonClient",
    "JsonPlaceholderClient",
    "translate_error",
]
