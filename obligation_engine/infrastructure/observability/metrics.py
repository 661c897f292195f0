"""Prometheus metrics for schedule generation, alert planning and rejected input"""

from typing import Iterable
from prometheus_client import Counter, Histogram

from obligation_engine.domain.models import AlertIntent

# Schedule metrics
schedule_counter = Counter(
    "obligation_schedule_total",
    "Amortization schedules generated",
    ["truncated"],  # true | false
)

# Alert metrics
alert_intent_counter = Counter(
    "obligation_alert_intents_total",
    "Alert intents planned",
    ["category", "severity"],
)

# Input validation
rejected_input_counter = Counter(
    "obligation_rejected_input_total",
    "Requests rejected by domain validation",
    ["error"],  # InvalidInputError | DateConstructionError
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_schedule(term: int, entries: int) -> None:
    """Record whether the schedule paid off before the full term"""
    schedule_counter.labels(truncated=str(entries < term).lower()).inc()


def record_alert_intents(intents: Iterable[AlertIntent]) -> None:
    """Count planned intents by category and severity"""
    for intent in intents:
        alert_intent_counter.labels(
            category=intent.category.value,
            severity=intent.severity.value,
        ).inc()
