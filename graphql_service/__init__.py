"""GraphQL service with Prometheus request-outcome metrics."""

__version__ = "1.0.0"
