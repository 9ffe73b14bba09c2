"""Modular Pydantic Settings v2 configuration.

One frozen settings model per domain, each loaded through an LRU-cached getter:
    from graphql_service.core.settings import get_metrics_settings

    settings = get_metrics_settings()
    print(settings.path)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .app import AppSettings
from .graphql import GraphQLSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_graphql_settings,
    get_logging_settings,
    get_metrics_settings,
)
from .logs import LoggingSettings
from .metrics import MetricsSettings

__all__ = [
    "AppSettings",
    "GraphQLSettings",
    "LoggingSettings",
    "MetricsSettings",
    "clear_all_caches",
    "get_app_settings",
    "get_graphql_settings",
    "get_logging_settings",
    "get_metrics_settings",
]
