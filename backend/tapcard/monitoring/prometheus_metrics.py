"""
Prometheus metrics module for TapCard.

Service timings come from the @measure_operation decorator; the domain
counters track the sharing workflow (scans, views, connections).
"""

from typing import Optional, cast

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "tapcard_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "tapcard_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "tapcard_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

# Domain-specific counters
scan_resolutions_total = Counter(
    "tapcard_scan_resolutions_total",
    "Scan tokens resolved, by how the profile id was obtained",
    ["source"],  # url | numeric | nfc_tag
    registry=REGISTRY,
)

profile_views_recorded_total = Counter(
    "tapcard_profile_views_recorded_total",
    "Profile views appended",
    registry=REGISTRY,
)

connections_created_total = Counter(
    "tapcard_connections_created_total",
    "Connection edges created",
    ["scan_method"],
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Manages Prometheus metrics collection and exposure."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'ProfileService')
            operation: Operation/method name (e.g., 'save_for_user')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()
        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Generate Prometheus metrics in exposition format."""
        return cast(bytes, generate_latest(REGISTRY))

    @staticmethod
    def get_content_type() -> str:
        """Get the content type for Prometheus metrics."""
        return cast(str, CONTENT_TYPE_LATEST)

    # Domain helpers
    @staticmethod
    def inc_scan_resolution(source: str) -> None:
        scan_resolutions_total.labels(source=source).inc()

    @staticmethod
    def inc_profile_view() -> None:
        profile_views_recorded_total.inc()

    @staticmethod
    def inc_connection_created(scan_method: Optional[str]) -> None:
        connections_created_total.labels(scan_method=scan_method or "unknown").inc()


# Singleton instance
prometheus_metrics = PrometheusMetrics()
