"""Shared helpers for FastAPI endpoints"""

import logging
from datetime import datetime
from fastapi import HTTPException, Request

from obligation_engine.config import Settings, settings
from obligation_engine.domain.exceptions import DomainException
from obligation_engine.infrastructure.observability.metrics import rejected_input_counter


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings instance"""
    return settings


def wall_clock(now: datetime) -> datetime:
    """Domain dates are naive calendar dates, so drop any UTC offset the client sent"""
    return now.replace(tzinfo=None)


def reject(error: DomainException, request_id: str) -> HTTPException:
    """Map a domain validation failure to a 422 response"""
    rejected_input_counter.labels(error=type(error).__name__).inc()
    logging.warning(f"Rejected input: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=422, detail=str(error))
