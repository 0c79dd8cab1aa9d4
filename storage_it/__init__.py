"""Helpers for integration tests against the multi-cloud storage REST API."""

from .api_client import AuthSession, StorageApiClient
from .it_config import ITConfig, ITCredentials, get_instance
from .urls import UrlBuilder

__all__ = [
    "AuthSession",
    "ITConfig",
    "ITCredentials",
    "StorageApiClient",
    "UrlBuilder",
    "get_instance",
]
