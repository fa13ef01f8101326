"""Observability setup for OpenTelemetry, metrics, and structured logging."""

import logging

import structlog
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, generate_latest

from .config import settings

SERVICE_NAME = "voyage-booking-api"
SERVICE_VERSION = "1.0.0"

# Prometheus metrics
REGISTRY = CollectorRegistry()

BOOKINGS_CREATED = Counter(
    'bookings_created_total',
    'Total booking requests submitted',
    ['item_type'],
    registry=REGISTRY
)

BOOKING_STATUS_CHANGES = Counter(
    'booking_status_changes_total',
    'Total booking status updates made in the back-office',
    ['status'],
    registry=REGISTRY
)

TRACKING_LOOKUPS = Counter(
    'booking_tracking_lookups_total',
    'Total tracking code lookups',
    ['outcome'],
    registry=REGISTRY
)

VOUCHERS_GENERATED = Counter(
    'booking_vouchers_generated_total',
    'Total PDF vouchers rendered',
    ['status'],
    registry=REGISTRY
)

TRIP_PLAN_SUBMISSIONS = Counter(
    'trip_plan_submissions_total',
    'Total trip-planning form submissions',
    ['channel'],
    registry=REGISTRY
)

EMAILS_SENT = Counter(
    'booking_emails_total',
    'Booking emails handed to the email provider',
    ['recipient', 'outcome'],
    registry=REGISTRY
)

CATALOG_CHANGES = Counter(
    'catalog_changes_total',
    'Back-office catalog writes',
    ['entity', 'action'],
    registry=REGISTRY
)


def setup_structured_logging():
    """Configure structured logging with structlog."""

    def add_trace_context(logger, method_name, event_dict):
        """Add trace context to log events."""
        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            event_dict['trace_id'] = format(ctx.trace_id, '032x')
            event_dict['span_id'] = format(ctx.span_id, '016x')
        return event_dict

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _resource(app_name: str) -> Resource:
    return Resource.create({
        "service.name": app_name,
        "service.version": SERVICE_VERSION,
        "environment": settings.environment,
    })


def setup_tracing(app_name: str = SERVICE_NAME):
    """Setup OpenTelemetry tracing."""
    trace.set_tracer_provider(TracerProvider(resource=_resource(app_name)))

    # Export only when a collector is configured
    if settings.otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint)
        trace.get_tracer_provider().add_span_processor(BatchSpanProcessor(otlp_exporter))

    return trace.get_tracer(__name__)


def setup_metrics(app_name: str = SERVICE_NAME):
    """Setup OpenTelemetry metrics."""
    if settings.otlp_endpoint:
        otlp_exporter = OTLPMetricExporter(endpoint=settings.otlp_endpoint)
        reader = PeriodicExportingMetricReader(exporter=otlp_exporter, export_interval_millis=60000)
        metrics.set_meter_provider(MeterProvider(resource=_resource(app_name), metric_readers=[reader]))

    return metrics.get_meter(__name__)


def instrument_fastapi(app):
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app)


def instrument_sqlalchemy():
    """Instrument SQLAlchemy with OpenTelemetry."""
    SQLAlchemyInstrumentor().instrument()


class MetricsCollector:
    """Collector for business metrics."""

    @staticmethod
    def record_booking_created(item_type: str):
        """Record a booking submission (tour, activity or inquiry)."""
        BOOKINGS_CREATED.labels(item_type=item_type).inc()

    @staticmethod
    def record_status_change(status: str):
        """Record a back-office status update."""
        BOOKING_STATUS_CHANGES.labels(status=status).inc()

    @staticmethod
    def record_tracking_lookup(found: bool):
        """Record a tracking lookup outcome."""
        TRACKING_LOOKUPS.labels(outcome="found" if found else "not_found").inc()

    @staticmethod
    def record_voucher_generated(status: str):
        """Record a rendered voucher."""
        VOUCHERS_GENERATED.labels(status=status).inc()

    @staticmethod
    def record_trip_plan(channel: str):
        """Record a trip-planning submission ('whatsapp' or 'email')."""
        TRIP_PLAN_SUBMISSIONS.labels(channel=channel).inc()

    @staticmethod
    def record_email(recipient: str, sent: bool):
        """Record an email hand-off ('admin' or 'customer')."""
        EMAILS_SENT.labels(recipient=recipient, outcome="sent" if sent else "failed").inc()

    @staticmethod
    def record_catalog_change(entity: str, action: str):
        """Record a catalog write."""
        CATALOG_CHANGES.labels(entity=entity, action=action).inc()


def get_prometheus_metrics():
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()


class StructuredLogger:
    """Structured logger with business context."""

    def __init__(self, logger):
        self.logger = logger

    def info(self, message: str, **kwargs):
        """Log info message with context."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with context."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with context."""
        self.logger.error(message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message with context."""
        self.logger.debug(message, **kwargs)

    def with_context(self, **kwargs) -> "StructuredLogger":
        """Return a logger with ``kwargs`` bound to every event."""
        return StructuredLogger(self.logger.bind(**kwargs))


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(structlog.get_logger(name))
