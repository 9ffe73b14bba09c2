"""Prometheus metrics settings.

Environment variables use METRICS_ prefix.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MetricsSettings(BaseSettings):
    """Request-outcome metrics configuration.

    Environment variables use METRICS_ prefix.
    Example: METRICS_ENABLED=false, METRICS_PATH=/internal/metrics
    """

    enabled: bool = Field(
        default=True,
        description="Record request-outcome metrics. When False, a no-op recorder is used.",
    )
    path: str = Field(
        default="/metrics",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="Prometheus scrape endpoint path",
    )
    prefix: str = Field(
        default="graphql_server",
        min_length=1,
        max_length=100,
        pattern=r"^[a-zA-Z_:][a-zA-Z0-9_:]*$",
        description="Metric name prefix (must be a valid Prometheus metric name)",
    )

    model_config = SettingsConfigDict(
        env_prefix="METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
