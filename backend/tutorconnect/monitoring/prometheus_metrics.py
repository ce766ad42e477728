"""
Prometheus metrics module for the TutorConnect workflow engine.

Service timings come from the @measure_operation decorator; the domain
counters are incremented by the booking and message services.
"""

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Engine-local registry, kept apart from the process default
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "tutorconnect_service_operation_duration_seconds",
    "Wall time of measured service operations",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "tutorconnect_service_operations_total",
    "Measured service operations by outcome",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "tutorconnect_errors_total",
    "Failed service operations by exception type",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

booking_transitions_total = Counter(
    "tutorconnect_booking_transitions_total",
    "Booking status transitions by resulting status",
    ["status"],  # pending | confirmed | declined
    registry=REGISTRY,
)

messages_sent_total = Counter(
    "tutorconnect_messages_sent_total",
    "Messages appended to conversations by message type",
    ["type"],  # text | file | welcome
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Thin facade over the module-level collectors."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """Observe one @measure_operation call; failures also count by error type."""
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()

        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_booking_transition(status: str) -> None:
        booking_transitions_total.labels(status=status).inc()

    @staticmethod
    def record_message_sent(message_type: str) -> None:
        messages_sent_total.labels(type=message_type).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(REGISTRY)

    @staticmethod
    def get_content_type() -> str:
        return CONTENT_TYPE_LATEST


prometheus_metrics = PrometheusMetrics()
