"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable
from pythonjsonlogger import jsonlogger

from obligation_engine.config import settings
from obligation_engine.domain.models import AlertIntent


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_schedule(
    request_id: str,
    term: int,
    entries: int,
    monthly_payment: float,
    duration_ms: float,
) -> None:
    """Log amortization schedule generation"""
    logging.info(
        "Schedule generated",
        extra={
            "request_id": request_id,
            "step": "schedule_generated",
            "term": term,
            "entries": entries,
            "truncated": entries < term,
            "monthly_payment": round(monthly_payment, 2),
            "duration_ms": duration_ms,
        },
    )


def log_alert_plan(
    request_id: str,
    intents: Iterable[AlertIntent],
    duration_ms: float,
) -> None:
    """Log the outcome of an alert planning pass"""
    identifiers = [intent.identifier for intent in intents]
    logging.info(
        "Alert plan completed",
        extra={
            "request_id": request_id,
            "step": "alert_plan_complete",
            "intent_count": len(identifiers),
            "identifiers": identifiers,
            "duration_ms": duration_ms,
        },
    )
